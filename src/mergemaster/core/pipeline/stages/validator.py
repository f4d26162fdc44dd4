from __future__ import annotations

"""
Configuration and Selection Validation.

Gatekeeper for the merge pipeline. Settings arrive untyped from three
places (CLI flags, GUI widgets, the JSON store) and are coerced here
against a small schema; selections below the host's minimum are rejected
before any filesystem access.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from mergemaster.domain.config import get_default_config
from mergemaster.domain.merge_models import SelectionTooSmallError

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "n", "off"})

# Field -> (expected type name, lower bound for ints)
_SCHEMA: Dict[str, Tuple[str, Optional[int]]] = {
    "respect_gitignore": ("bool", None),
    "workspace_root": ("str", None),
    "output_path": ("str", None),
    "min_selection": ("int", 0),
    "max_workers": ("int", 1),
}


class _Invalid(Exception):
    """Raised by a coercer when a value cannot be used."""


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a settings dictionary.

    Unknown keys are dropped and missing ones take their default. Lenient
    mode converts obvious spellings ("yes", "3") and falls back to the
    default for anything else, recording a warning either way.

    Args:
        config: Raw settings.
        strict: Raise TypeError/ValueError instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Clean settings and warnings.
    """
    defaults = get_default_config()
    warnings: List[str] = []

    if not isinstance(config, dict):
        msg = f"Settings must be a mapping, got {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        logger.warning(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    clean: Dict[str, Any] = {}
    for key, default in defaults.items():
        raw = config.get(key)
        if raw is None:
            clean[key] = default
            continue

        kind, minimum = _SCHEMA[key]
        try:
            value, note = _COERCERS[kind](raw, strict)
            if minimum is not None and value < minimum:
                if strict:
                    raise ValueError(f"'{key}' must be >= {minimum}, got {value}.")
                raise _Invalid(f"below minimum {minimum}")
        except _Invalid as e:
            if strict:
                raise TypeError(f"'{key}': expected {kind}, got {raw!r}.") from e
            warnings.append(f"'{key}': {e} ({raw!r}); using default {default!r}.")
            clean[key] = default
            continue

        if note:
            warnings.append(f"'{key}': {note}.")
        clean[key] = value

    return clean, warnings


def validate_selection(selection: Sequence[Any], min_selection: int) -> None:
    """
    Enforce the host's minimum selection size.

    Raises:
        SelectionTooSmallError: If fewer entries than required were selected.
    """
    if len(selection) < min_selection:
        noun = "item" if min_selection == 1 else "items"
        raise SelectionTooSmallError(
            f"Select at least {min_selection} {noun} to merge (got {len(selection)})."
        )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: COERCERS
# -----------------------------------------------------------------------------
# Each returns (value, note); a non-empty note means a conversion happened.

def _to_bool(raw: Any, strict: bool) -> Tuple[bool, str]:
    if isinstance(raw, bool):
        return raw, ""
    if not strict:
        if isinstance(raw, (int, float)) and raw in (0, 1):
            return bool(raw), f"number {raw} read as {bool(raw)}"
        if isinstance(raw, str):
            word = raw.strip().lower()
            if word in _TRUE_WORDS:
                return True, f"'{raw}' read as True"
            if word in _FALSE_WORDS:
                return False, f"'{raw}' read as False"
    raise _Invalid("not a boolean")


def _to_str(raw: Any, strict: bool) -> Tuple[str, str]:
    if isinstance(raw, str):
        return raw.strip(), ""
    raise _Invalid("not a string")


def _to_int(raw: Any, strict: bool) -> Tuple[int, str]:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw, ""
    if not strict and isinstance(raw, str):
        try:
            return int(raw.strip()), f"'{raw}' read as a number"
        except ValueError:
            pass
    raise _Invalid("not an integer")


_COERCERS: Dict[str, Callable[[Any, bool], Tuple[Any, str]]] = {
    "bool": _to_bool,
    "str": _to_str,
    "int": _to_int,
}
