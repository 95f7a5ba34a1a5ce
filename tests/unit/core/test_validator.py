from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Default value injection.
2. Type coercion with warnings.
3. Strict mode validation.
"""

import os

import pytest

from fstree.core.validator import validate_config


def test_validate_none_returns_defaults() -> None:
    cfg, warnings = validate_config(None)

    assert cfg["render_style"] == "indent"
    assert cfg["indent_unit"] == 2
    assert cfg["follow_symlinks"] is False
    assert len(warnings) == 1


def test_validate_empty_dict_returns_defaults_without_warnings() -> None:
    cfg, warnings = validate_config({})

    assert cfg["snapshot_path"] == ""
    assert cfg["log_level"] == "INFO"
    assert warnings == []


def test_validate_coerces_strings() -> None:
    raw = {
        "indent_unit": "4",
        "follow_symlinks": "yes",
        "render_style": " ASCII ",
        "log_level": "debug",
    }
    cfg, warnings = validate_config(raw)

    assert cfg["indent_unit"] == 4
    assert cfg["follow_symlinks"] is True
    assert cfg["render_style"] == "ascii"
    assert cfg["log_level"] == "DEBUG"
    assert len(warnings) == 2


def test_validate_out_of_range_indent_falls_back() -> None:
    cfg, warnings = validate_config({"indent_unit": 99})
    assert cfg["indent_unit"] == 2
    assert any("indent_unit" in w for w in warnings)


def test_validate_unknown_style_falls_back() -> None:
    cfg, warnings = validate_config({"render_style": "fancy"})
    assert cfg["render_style"] == "indent"
    assert len(warnings) == 1


def test_validate_csv_exclusions() -> None:
    cfg, _ = validate_config({"exclude_patterns": r"^build$, \.tmp$"})
    assert cfg["exclude_patterns"] == [r"^build$", r"\.tmp$"]


def test_validate_keeps_explicit_empty_exclusions() -> None:
    cfg, warnings = validate_config({"exclude_patterns": []})
    assert cfg["exclude_patterns"] == []
    assert warnings == []


def test_validate_discards_non_string_list_items() -> None:
    cfg, warnings = validate_config({"exclude_patterns": ["ok", 3, "  "]})
    assert cfg["exclude_patterns"] == ["ok"]
    assert len(warnings) == 1


def test_strict_mode_raises_on_type_mismatch() -> None:
    with pytest.raises(TypeError):
        validate_config({"indent_unit": "4"}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"follow_symlinks": "yes"}, strict=True)
    with pytest.raises(TypeError):
        validate_config([], strict=True)


def test_strict_mode_raises_on_bad_value() -> None:
    with pytest.raises(ValueError):
        validate_config({"indent_unit": -1}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"render_style": "fancy"}, strict=True)


def test_input_path_is_normalized(tmp_path) -> None:
    cfg, _ = validate_config({"input_path": "  "})
    assert cfg["input_path"] == os.getcwd()

    cfg, _ = validate_config({"input_path": str(tmp_path / "a" / ".." / "b")})
    assert cfg["input_path"] == str(tmp_path / "b")
