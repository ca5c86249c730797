"""Tests for the end-to-end estimation pipeline."""

from devtime.config.schema import DevTimeConfig
from devtime.estimation.client import OpenRouterClient
from devtime.estimation.models import EstimatorSettings, FailureKind
from devtime.pipeline import ignored_files, run_estimation, settings_from_config

LEVELS = ["Junior", "Senior", "Expert"]


def test_run_estimation_success(fake_openai, estimation_json, sample_diff_mixed):
    client = OpenRouterClient(EstimatorSettings(api_key="k"), client=fake_openai(estimation_json))
    run = run_estimation(sample_diff_mixed, ["*.md"], LEVELS, client)
    assert run.estimation.ok
    assert run.filter_result.filtered_stats.changed_files == 5
    assert run.filter_result.file_type_analysis.total_files == 6
    prompt = client.client.chat.completions.calls[0]["messages"][1]["content"]
    assert "**Files Changed:** 5" in prompt
    assert "# New title" not in prompt
    assert "- Documentation (1): README.md" in prompt


def test_run_estimation_failure(fake_openai, sample_diff_mixed):
    client = OpenRouterClient(EstimatorSettings(api_key="k"), client=fake_openai(""))
    run = run_estimation(sample_diff_mixed, [], LEVELS, client)
    assert run.estimation.failure.kind == FailureKind.EMPTY_RESPONSE


def test_ignored_files(sample_diff_mixed):
    from devtime.diff.engine import filter_diff_by_patterns

    result = filter_diff_by_patterns(sample_diff_mixed, ["*.md", "assets/**"])
    assert sorted(ignored_files(result, ["*.md", "assets/**"])) == ["README.md", "assets/logo.png"]


def test_settings_from_config():
    cfg = DevTimeConfig()
    cfg.estimation.api_key = "sk-x"
    cfg.estimation.model = "a/b"
    settings = settings_from_config(cfg)
    assert settings.api_key == "sk-x"
    assert settings.model == "a/b"
    assert settings.max_tokens == 2000
