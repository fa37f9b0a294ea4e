"""Policy limits for drawing schedules, optionally overridden from ``config.yaml``."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

import yaml

from .conversions import ConversionError

logger = logging.getLogger(__name__)

# Rounding applied to generated die diameters (mm).
DIAMETER_DECIMALS = 3

CONFIG_SECTION = "trefila"


@dataclass(frozen=True)
class DrawingLimits:
    """Thresholds and solver settings shared by both scheduling policies.

    Reductions that drive the schedulers are fractions (``0.18``); the
    classification thresholds are percentages, as shown to the operator.
    """

    target_last_reduction: float = 0.18
    bisection_iterations: int = 50
    progressive_critical: float = 29.0
    progressive_high: float = 22.0
    progressive_final_max: float = 19.0
    uniform_high: float = 23.0
    uniform_low: float = 19.0
    diameter_decimals: int = DIAMETER_DECIMALS


DEFAULT_LIMITS = DrawingLimits()


def limits_from_mapping(raw: Mapping[str, Any], base: DrawingLimits = DEFAULT_LIMITS) -> DrawingLimits:
    known = {f.name for f in fields(DrawingLimits)}
    overrides: dict = {}
    for key, value in raw.items():
        if key not in known:
            raise ConversionError(f"Unknown drawing limit '{key}'.")
        try:
            if key in ("bisection_iterations", "diameter_decimals"):
                overrides[key] = int(value)
            else:
                overrides[key] = float(value)
        except (TypeError, ValueError):
            raise ConversionError(f"Invalid numeric value for '{key}': {value!r}.")
    if not 0.0 < overrides.get("target_last_reduction", base.target_last_reduction) < 1.0:
        raise ConversionError("target_last_reduction must lie strictly between 0 and 1.")
    if overrides.get("bisection_iterations", base.bisection_iterations) <= 0:
        raise ConversionError("bisection_iterations must be positive.")
    return replace(base, **overrides)


def load_limits(config_path: str = "config.yaml") -> DrawingLimits:
    """Read the ``trefila`` section of *config_path*; defaults when absent."""
    if not os.path.exists(config_path):
        logger.debug(f"No config at {config_path}, using default drawing limits.")
        return DEFAULT_LIMITS
    with open(config_path, "r", encoding="utf-8") as file:
        try:
            config = yaml.safe_load(file) or {}
        except yaml.YAMLError as exc:
            raise ConversionError(f"Could not parse {config_path}: {exc}") from exc
    if not isinstance(config, Mapping):
        raise ConversionError(f"{config_path} must contain a mapping at the top level.")
    section = config.get(CONFIG_SECTION) or {}
    if not isinstance(section, Mapping):
        raise ConversionError(f"'{CONFIG_SECTION}' section in {config_path} must be a mapping.")
    limits = limits_from_mapping(section)
    logger.info(f"Loaded drawing limits from {config_path}")
    return limits
