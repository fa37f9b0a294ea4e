"""Helpers that convert raw form fields and stored rows into drawing models."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from .models import DrawingMode, DrawingSpec, Recipe

_MODE_ALIASES: Dict[str, DrawingMode] = {
    "progressive": "progressive",
    "cacetes": "progressive",
    "uniform": "uniform",
    "frieiras": "uniform",
}


class ConversionError(ValueError):
    """Raised when raw data cannot be translated into a drawing model."""


def normalize_mode(value: object) -> DrawingMode:
    """Map a user-facing mode label onto ``"progressive"`` or ``"uniform"``."""
    if isinstance(value, str):
        mode = _MODE_ALIASES.get(value.strip().lower())
        if mode is not None:
            return mode
    raise ConversionError(f"Unsupported drawing mode: {value!r}")


def spec_from_mapping(
    raw: Mapping[str, object],
    default_mode: DrawingMode = "progressive",
) -> DrawingSpec:
    """Return a :class:`DrawingSpec` built from form fields or a stored row.

    Recognised keys are ``entry``/``entry_diameter``, ``exit``/
    ``exit_diameter``, ``passes``/``pass_count`` and ``mode``. The spec is
    not validated here; schedulers call :meth:`DrawingSpec.validate`.
    """

    context = _preferred_label(raw)
    entry = _required_float(raw, ("entry_diameter", "entry"), context)
    exit_ = _required_float(raw, ("exit_diameter", "exit"), context)
    passes = _required_int(raw, ("pass_count", "passes"), context)
    mode_raw = raw.get("mode")
    mode = default_mode if mode_raw in (None, "") else normalize_mode(mode_raw)
    return DrawingSpec(entry_diameter=entry, exit_diameter=exit_, pass_count=passes, mode=mode)


def recipe_from_mapping(raw: Mapping[str, object]) -> Recipe:
    """Build a :class:`Recipe` from a persisted row (``entry``, ``exit``, ``passes``, ``dies``)."""

    context = _preferred_label(raw)
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConversionError(f"{context}: recipe name is required.")
    dies = raw.get("dies")
    if dies is None:
        dies = raw.get("diameters", [])
    if isinstance(dies, (str, bytes)) or not hasattr(dies, "__iter__"):
        raise ConversionError(f"{context}: 'dies' must be a list of diameters.")
    diameters: Tuple[float, ...] = tuple(_to_float(d, "dies", context) for d in dies)  # type: ignore[union-attr]
    recipe_id = raw.get("id")
    return Recipe(
        name=name.strip(),
        date=str(raw.get("date") or ""),
        entry_diameter=_required_float(raw, ("entry", "entry_diameter"), context),
        exit_diameter=_required_float(raw, ("exit", "exit_diameter"), context),
        pass_count=_required_int(raw, ("passes", "pass_count"), context),
        diameters=diameters,
        id=None if recipe_id is None else str(recipe_id),
    )


def recipe_to_mapping(recipe: Recipe) -> Dict[str, Any]:
    """Inverse of :func:`recipe_from_mapping`, using the stored column names."""

    return {
        "id": recipe.id,
        "name": recipe.name,
        "date": recipe.date,
        "entry": recipe.entry_diameter,
        "exit": recipe.exit_diameter,
        "passes": recipe.pass_count,
        "dies": list(recipe.diameters),
    }


def _preferred_label(raw: Mapping[str, object]) -> str:
    for key in ("name", "id"):
        val = raw.get(key)
        if isinstance(val, str) and val.strip():
            return val
    return "drawing spec"


def _lookup(raw: Mapping[str, object], keys: Tuple[str, ...]) -> Tuple[str, Optional[object]]:
    for key in keys:
        value = raw.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        return key, value
    return keys[0], None


def _required_float(raw: Mapping[str, object], keys: Tuple[str, ...], context: str) -> float:
    key, value = _lookup(raw, keys)
    if value is None:
        raise ConversionError(f"{context}: missing value for '{key}'.")
    return _to_float(value, key, context)


def _required_int(raw: Mapping[str, object], keys: Tuple[str, ...], context: str) -> int:
    value = _required_float(raw, keys, context)
    if not value.is_integer():
        raise ConversionError(f"{context}: '{keys[0]}' must be a whole number.")
    return int(value)


def _to_float(value: object, key: str, context: str) -> float:
    if isinstance(value, bool):
        raise ConversionError(f"{context}: invalid numeric value for '{key}'.")
    try:
        if isinstance(value, str):
            # decimal comma as typed on pt-BR keyboards
            value = value.strip().replace(",", ".")
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConversionError(f"{context}: invalid numeric value for '{key}'.")
