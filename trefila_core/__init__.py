"""Core math package for wire-drawing pass schedules."""

from .models import DieSchedule, DrawingMode, DrawingSpec, InvalidSpec, PassReduction, PassStatus, Recipe
from .config import DEFAULT_LIMITS, DIAMETER_DECIMALS, DrawingLimits, load_limits
from .conversions import ConversionError, normalize_mode, recipe_from_mapping, recipe_to_mapping, spec_from_mapping
from .engine import (
    classify_pass,
    compute_reductions,
    final_pass_exceeds_limit,
    reference_lines,
    replace_die,
    resize_dies,
    schedule,
    schedule_progressive,
    schedule_uniform,
)
from .solvers import bisect_decreasing, bisect_increasing
from .store import RecipeStore, RecipeStoreError, snapshot_recipe

__all__ = [
    "DieSchedule",
    "DrawingMode",
    "DrawingSpec",
    "InvalidSpec",
    "PassReduction",
    "PassStatus",
    "Recipe",
    "DEFAULT_LIMITS",
    "DIAMETER_DECIMALS",
    "DrawingLimits",
    "load_limits",
    "ConversionError",
    "normalize_mode",
    "recipe_from_mapping",
    "recipe_to_mapping",
    "spec_from_mapping",
    "classify_pass",
    "compute_reductions",
    "final_pass_exceeds_limit",
    "reference_lines",
    "replace_die",
    "resize_dies",
    "schedule",
    "schedule_progressive",
    "schedule_uniform",
    "bisect_decreasing",
    "bisect_increasing",
    "RecipeStore",
    "RecipeStoreError",
    "snapshot_recipe",
]
