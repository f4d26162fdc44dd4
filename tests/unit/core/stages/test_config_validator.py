from __future__ import annotations

"""
Unit tests for configuration and selection validation.
"""

from typing import Any, Dict

import pytest

from mergemaster.core.pipeline.stages.validator import validate_config, validate_selection
from mergemaster.domain.merge_models import SelectionTooSmallError


def test_valid_config_passes_unchanged(mock_config_dict: Dict[str, Any]) -> None:
    conf, warnings = validate_config(mock_config_dict)
    assert conf == mock_config_dict
    assert warnings == []


def test_non_dict_config_returns_defaults() -> None:
    conf, warnings = validate_config(["not", "a", "dict"])
    assert conf["respect_gitignore"] is True
    assert len(warnings) == 1


def test_non_dict_config_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("bad", strict=True)


def test_unknown_keys_are_dropped(mock_config_dict: Dict[str, Any]) -> None:
    mock_config_dict["legacy_option"] = 1
    conf, _ = validate_config(mock_config_dict)
    assert "legacy_option" not in conf


@pytest.mark.parametrize("raw, expected", [("yes", True), ("off", False), (1, True), (0, False)])
def test_bool_coercion(mock_config_dict: Dict[str, Any], raw: Any, expected: bool) -> None:
    mock_config_dict["respect_gitignore"] = raw
    conf, warnings = validate_config(mock_config_dict)
    assert conf["respect_gitignore"] is expected
    assert warnings


def test_int_coercion_and_bounds(mock_config_dict: Dict[str, Any]) -> None:
    mock_config_dict["max_workers"] = "3"
    mock_config_dict["min_selection"] = -1
    conf, warnings = validate_config(mock_config_dict)
    assert conf["max_workers"] == 3
    assert conf["min_selection"] == 1
    assert len(warnings) == 2


def test_zero_workers_rejected_in_strict_mode(mock_config_dict: Dict[str, Any]) -> None:
    mock_config_dict["max_workers"] = 0
    with pytest.raises(ValueError):
        validate_config(mock_config_dict, strict=True)


def test_bool_is_not_an_int(mock_config_dict: Dict[str, Any]) -> None:
    mock_config_dict["max_workers"] = True
    conf, warnings = validate_config(mock_config_dict)
    assert conf["max_workers"] == 8
    assert warnings


def test_validate_selection() -> None:
    validate_selection(["a"], 1)
    validate_selection([], 0)
    with pytest.raises(SelectionTooSmallError, match="at least 2 items"):
        validate_selection(["a"], 2)
