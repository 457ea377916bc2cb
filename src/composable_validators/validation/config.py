"""Validation configuration constants.

This module centralizes the priorities and parameters of the built-in units.
Adjust these constants (or supply a YAML file to ``load_config``) to tune the
default registry without touching the units themselves.

Priorities:
    Lower values run first. Ties are broken by registration order.
    - 0: gates (not-null); run before anything that would dereference the value
    - 10-40: finer-grained checks delegated to by the gate

Only parameters of built-in units are configurable. Rules themselves are
Python classes registered in code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from composable_validators.core.enums import ErrorPolicy

# ============================================================================
# TAGS
# ============================================================================

DEFAULT_TAG = "default"
USERNAME_TAG = "username"


# ============================================================================
# PRIORITIES
# ============================================================================

DEFAULT_PRIORITY = 100
NOT_NULL_PRIORITY = 0
MIN_LENGTH_PRIORITY = 10
MAX_LENGTH_PRIORITY = 20
PATTERN_PRIORITY = 30
DENYLIST_PRIORITY = 40


# ============================================================================
# USERNAME RULES
# ============================================================================

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = r"[A-Za-z0-9_.-]+"
DENIED_WORDS: Tuple[str, ...] = ("admin", "root", "support")

DEFAULT_ERROR_POLICY = ErrorPolicy.RECORD


@dataclass(frozen=True)
class ValidatorConfig:
    """Parameters for the default registry.

    Attributes:
        min_length: Minimum username length (inclusive).
        max_length: Maximum username length (inclusive).
        pattern: Regular expression a username must fully match.
        reject_blank: Treat whitespace-only strings like a missing value.
        denied_words: Words a username must not contain (case-insensitive).
        denylist_file: Optional file with additional denied words.
        error_policy: How the orchestrator handles units that raise.
    """

    min_length: int = USERNAME_MIN_LENGTH
    max_length: int = USERNAME_MAX_LENGTH
    pattern: str = USERNAME_PATTERN
    reject_blank: bool = True
    denied_words: Tuple[str, ...] = DENIED_WORDS
    denylist_file: Optional[Path] = None
    error_policy: ErrorPolicy = DEFAULT_ERROR_POLICY

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {self.min_length}")
        if self.max_length < self.min_length:
            raise ValueError(
                f"max_length ({self.max_length}) must be >= min_length ({self.min_length})"
            )
        if not self.pattern:
            raise ValueError("pattern must not be empty")
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern {self.pattern!r}: {e}") from e


_USERNAME_KEYS = {"min_length", "max_length", "pattern", "reject_blank", "denied_words", "denylist_file"}


def _as_int(key: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"'{key}' must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be an integer, got {raw!r}") from e


def load_config(config_path: Path) -> ValidatorConfig:
    """Load a ValidatorConfig from a YAML file.

    Expected layout (every key optional)::

        error_policy: record        # or "propagate"
        username:
          min_length: 3
          max_length: 30
          pattern: "[a-z0-9_]+"
          reject_blank: true
          denied_words: [admin, root]
          denylist_file: denylist.txt   # relative to the config file

    Args:
        config_path: Path to the YAML file.

    Returns:
        ValidatorConfig with defaults for every key the file omits.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed or contains unknown keys or
            invalid values.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping at the top level")

    unknown = set(data) - {"error_policy", "username"}
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(sorted(unknown))}")

    overrides: Dict[str, Any] = {}

    if "error_policy" in data:
        try:
            overrides["error_policy"] = ErrorPolicy(str(data["error_policy"]).lower())
        except ValueError as e:
            valid = ", ".join(p.value for p in ErrorPolicy)
            raise ValueError(
                f"Invalid error_policy '{data['error_policy']}'. Valid policies: {valid}"
            ) from e

    username = data.get("username") or {}
    if not isinstance(username, dict):
        raise ValueError("'username' section must be a mapping")
    unknown = set(username) - _USERNAME_KEYS
    if unknown:
        raise ValueError(f"Unknown username keys: {', '.join(sorted(unknown))}")

    for key in ("min_length", "max_length"):
        if key in username:
            overrides[key] = _as_int(key, username[key])
    if "pattern" in username:
        if username["pattern"] is None:
            raise ValueError("'pattern' must be a regular expression, got null")
        overrides["pattern"] = str(username["pattern"])
    if "reject_blank" in username:
        overrides["reject_blank"] = bool(username["reject_blank"])
    if "denied_words" in username:
        words = username["denied_words"]
        if words is None:
            words = []
        if not isinstance(words, list):
            raise ValueError(f"'denied_words' must be a list of words, got {words!r}")
        overrides["denied_words"] = tuple(str(w) for w in words)
    if username.get("denylist_file"):
        denylist_file = Path(username["denylist_file"])
        if not denylist_file.is_absolute():
            denylist_file = config_path.parent / denylist_file
        overrides["denylist_file"] = denylist_file

    return replace(ValidatorConfig(), **overrides)
