"""Tests for validation configuration constants and YAML loading.

This module verifies the defaults of `ValidatorConfig`, its field constraints,
and that `load_config` applies overrides and rejects malformed files.
"""

from pathlib import Path

import pytest

from composable_validators.core.enums import ErrorPolicy
from composable_validators.validation.config import (
    DENIED_WORDS,
    NOT_NULL_PRIORITY,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    ValidatorConfig,
    load_config,
)


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "validators.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults():
    config = ValidatorConfig()
    assert config.min_length == USERNAME_MIN_LENGTH == 3
    assert config.max_length == USERNAME_MAX_LENGTH == 30
    assert config.denied_words == DENIED_WORDS
    assert config.error_policy is ErrorPolicy.RECORD
    assert config.denylist_file is None


def test_gate_runs_before_everything():
    assert NOT_NULL_PRIORITY == 0


def test_invalid_bounds_rejected():
    with pytest.raises(ValueError, match="max_length"):
        ValidatorConfig(min_length=10, max_length=5)
    with pytest.raises(ValueError, match="min_length"):
        ValidatorConfig(min_length=-1)


def test_load_config_overrides(tmp_path):
    path = _write(
        tmp_path,
        "error_policy: PROPAGATE\n"
        "username:\n"
        "  min_length: 2\n"
        "  max_length: 8\n"
        "  pattern: '[a-z]+'\n"
        "  reject_blank: false\n"
        "  denied_words: [owner]\n"
        "  denylist_file: extra.txt\n",
    )

    config = load_config(path)

    assert config.error_policy is ErrorPolicy.PROPAGATE
    assert config.min_length == 2
    assert config.max_length == 8
    assert config.pattern == "[a-z]+"
    assert config.reject_blank is False
    assert config.denied_words == ("owner",)
    assert config.denylist_file == tmp_path / "extra.txt"


def test_load_config_empty_file_gives_defaults(tmp_path):
    assert load_config(_write(tmp_path, "")) == ValidatorConfig()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "content, match",
    [
        ("rules: []\n", "Unknown config keys"),
        ("username:\n  shout: true\n", "Unknown username keys"),
        ("error_policy: ignore\n", "Invalid error_policy"),
        ("- a\n- b\n", "mapping at the top level"),
        ("username: [1, 2]\n", "must be a mapping"),
        ("username:\n  min_length: 9\n  max_length: 3\n", "max_length"),
        ("username: {min_length: [\n", "Failed to read config"),
        ("username:\n  pattern: '['\n", "Invalid pattern"),
        ("username:\n  pattern:\n", "must be a regular expression"),
        ("username:\n  min_length:\n", "'min_length' must be an integer"),
        ("username:\n  max_length: [5]\n", "'max_length' must be an integer"),
        ("username:\n  min_length: yes\n", "'min_length' must be an integer"),
        ("username:\n  denied_words: admin\n", "must be a list of words"),
    ],
)
def test_load_config_rejects_malformed_files(tmp_path, content, match):
    with pytest.raises(ValueError, match=match):
        load_config(_write(tmp_path, content))


def test_invalid_pattern_rejected():
    with pytest.raises(ValueError, match="Invalid pattern"):
        ValidatorConfig(pattern="(unclosed")


def test_load_config_null_denied_words_clears_list(tmp_path):
    config = load_config(_write(tmp_path, "username:\n  denied_words:\n"))
    assert config.denied_words == ()
