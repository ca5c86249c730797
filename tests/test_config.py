"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from devtime.config.loader import ConfigError, load_config, resolve_skill_levels
from devtime.config.schema import DEFAULT_MODEL


class TestSkillLevels:
    def test_filters_invalid(self):
        assert resolve_skill_levels(["Junior", " Expert", "Wizard"]) == ["Junior", "Expert"]

    def test_none_valid_raises(self):
        with pytest.raises(ConfigError, match="No valid skill levels"):
            resolve_skill_levels(["Intern"])


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path, clean_env):
        cfg = load_config(tmp_path)
        assert cfg.estimation.model == DEFAULT_MODEL
        assert cfg.estimation.skill_levels == ["Junior", "Senior", "Expert"]
        assert cfg.filter.ignore_patterns == []
        assert cfg.github.max_diff_chars == 10000
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text(
            'version = "1.0"\n'
            "[estimation]\n"
            'model = "openai/gpt-4o-mini"\n'
            'skill_levels = ["Senior"]\n'
            "[filter]\n"
            'ignore_patterns = ["dist/**"]\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.estimation.model == "openai/gpt-4o-mini"
        assert cfg.estimation.skill_levels == ["Senior"]
        assert cfg.filter.ignore_patterns == ["dist/**"]

    def test_unknown_keys_ignored(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text("[estimation]\nflavour = 'mint'\n")
        cfg = load_config(tmp_path)
        assert cfg.estimation.model == DEFAULT_MODEL

    def test_api_key_not_read_from_file(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text("[estimation]\napi_key = 'sk-in-repo'\n")
        cfg = load_config(tmp_path)
        assert cfg.estimation.api_key is None

    def test_config_override_path(self, tmp_path: Path, clean_env):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.output.format == "json"

    def test_missing_override_raises(self, tmp_path: Path, clean_env):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text('[output]\nformat = "html"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_no_valid_skill_levels_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text('[estimation]\nskill_levels = ["Guru"]\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_api_key(self, tmp_path: Path, clean_env):
        clean_env.setenv("OPENROUTER_API_KEY", "sk-test")
        assert load_config(tmp_path).estimation.api_key == "sk-test"

    def test_action_inputs(self, tmp_path: Path, clean_env):
        clean_env.setenv("INPUT_OPENROUTER-API-KEY", "sk-action")
        clean_env.setenv("INPUT_MODEL", "anthropic/claude-3-haiku")
        clean_env.setenv("INPUT_SKILL-LEVELS", "Senior, Expert")
        clean_env.setenv("INPUT_IGNORE-PATTERNS", "dist/**, *.min.js")
        cfg = load_config(tmp_path)
        assert cfg.estimation.api_key == "sk-action"
        assert cfg.estimation.model == "anthropic/claude-3-haiku"
        assert cfg.estimation.skill_levels == ["Senior", "Expert"]
        assert cfg.filter.ignore_patterns == ["dist/**", "*.min.js"]

    def test_blank_action_input_ignored(self, tmp_path: Path, clean_env):
        clean_env.setenv("INPUT_MODEL", "")
        assert load_config(tmp_path).estimation.model == DEFAULT_MODEL

    def test_env_patterns_extend_file(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text('[filter]\nignore_patterns = ["dist/**"]\n')
        clean_env.setenv("DEVTIME_IGNORE_PATTERNS", "build/**")
        cfg = load_config(tmp_path)
        assert cfg.filter.ignore_patterns == ["dist/**", "build/**"]

    def test_github_token(self, tmp_path: Path, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghs_x")
        assert load_config(tmp_path).github.token == "ghs_x"

    def test_invalid_format_env_ignored(self, tmp_path: Path, clean_env):
        clean_env.setenv("DEVTIME_FORMAT", "pdf")
        assert load_config(tmp_path).output.format == "terminal"

    def test_max_diff_chars(self, tmp_path: Path, clean_env):
        clean_env.setenv("DEVTIME_MAX_DIFF_CHARS", "500")
        assert load_config(tmp_path).github.max_diff_chars == 500

    def test_invalid_skill_levels_env_raises(self, tmp_path: Path, clean_env):
        clean_env.setenv("DEVTIME_SKILL_LEVELS", "Novice")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestValueTypes:
    def test_string_patterns_with_env_patterns_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text('[filter]\nignore_patterns = "dist/**"\n')
        clean_env.setenv("DEVTIME_IGNORE_PATTERNS", "build/**")
        with pytest.raises(ConfigError, match="ignore_patterns must be a list of strings"):
            load_config(tmp_path)

    def test_non_integer_max_diff_chars_raises(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text('[github]\nmax_diff_chars = "big"\n')
        with pytest.raises(ConfigError, match="max_diff_chars must be an integer"):
            load_config(tmp_path)

    def test_non_string_patterns_raise(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text("[filter]\nignore_patterns = [1, 2]\n")
        with pytest.raises(ConfigError, match="ignore_patterns must be a list of strings"):
            load_config(tmp_path)

    @pytest.mark.parametrize(
        "body",
        [
            '[estimation]\nmax_tokens = "lots"\n',
            "[estimation]\nmax_tokens = true\n",
            '[estimation]\ntemperature = "warm"\n',
            "[estimation]\nskill_levels = \"Senior\"\n",
            "[output]\nshow_summary = 1\n",
        ],
    )
    def test_wrong_types_raise(self, tmp_path: Path, clean_env, body):
        (tmp_path / ".devtime.toml").write_text(body)
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_integer_temperature_accepted(self, tmp_path: Path, clean_env):
        (tmp_path / ".devtime.toml").write_text("[estimation]\ntemperature = 0\n")
        assert load_config(tmp_path).estimation.temperature == 0
