from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (CLI overrides, the
persisted JSON file) and the scan/render services. Coerces types, injects
defaults and reports every correction as a warning.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from fstree.domain.config import get_default_config
from fstree.domain.constants import RENDER_STYLES
from fstree.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_MAX_INDENT_UNIT = 16

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          the list of warnings produced.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on a value outside its allowed range.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("input_path", "snapshot_path", "log_file"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)
    merged["input_path"] = normalize_path(merged["input_path"], defaults["input_path"])
    merged["log_level"] = _as_str(
        merged.get("log_level"), defaults["log_level"], "log_level", warnings, strict
    ).upper()

    merged["follow_symlinks"] = _as_bool(
        merged.get("follow_symlinks"), defaults["follow_symlinks"], "follow_symlinks", warnings, strict
    )

    merged["indent_unit"] = _as_int(
        merged.get("indent_unit"), defaults["indent_unit"], "indent_unit", warnings, strict,
        minimum=0, maximum=_MAX_INDENT_UNIT,
    )

    merged["render_style"] = _as_choice(
        merged.get("render_style"), defaults["render_style"], RENDER_STYLES,
        "render_style", warnings, strict,
    )

    merged["exclude_patterns"] = _as_list_str(
        merged.get("exclude_patterns"), defaults["exclude_patterns"], "exclude_patterns",
        warnings, strict,
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        *,
        minimum: int,
        maximum: int,
) -> int:
    """Coerce numeric strings into ints and clamp-check the allowed range."""
    if value is None:
        return fallback

    if isinstance(value, bool) or not isinstance(value, int):
        if strict or not isinstance(value, str):
            msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Using fallback.")
            return fallback
        try:
            value = int(value.strip())
        except ValueError:
            warnings.append(f"Invalid field '{field}': '{value}' is not a number. Using fallback.")
            return fallback
        warnings.append(f"Field '{field}' converted from string to int.")

    if not minimum <= value <= maximum:
        msg = f"Invalid field '{field}': {value} is outside [{minimum}, {maximum}]."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return value


def _as_choice(
        value: Any,
        fallback: str,
        choices: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Accept only one of the allowed (case-insensitive) keywords."""
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()

    msg = f"Invalid field '{field}': {value!r} is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """
    Ensure input is a list of sanitized strings, supporting CSV parsing.

    An explicit empty list is kept as is (for exclusions it means "exclude
    nothing").
    """
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
