"""Starter .devtime.toml template."""

DEFAULT_TOML = """\
# devtime configuration
version = "1.0"

[estimation]
model = "meta-llama/llama-3.2-3b-instruct:free"
skill_levels = ["Junior", "Senior", "Expert"]
temperature = 0.1
max_tokens = 2000
# base_url = "https://openrouter.ai/api/v1"
# The API key is read from OPENROUTER_API_KEY, never from this file.

[filter]
# Files matching these globs are left out of the estimate.
# *  matches within one path segment, ** crosses directories, ? is one character
ignore_patterns = [
    "dist/**",
    "build/**",
    "*.min.js",
    "package-lock.json",
    "yarn.lock",
]

[github]
# api_url = "https://api.github.com"
max_diff_chars = 10000

[output]
format = "terminal"       # terminal | json | markdown
show_summary = true
"""
