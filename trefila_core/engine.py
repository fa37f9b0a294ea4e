"""Pure math routines for wire-drawing pass schedules."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .config import DEFAULT_LIMITS, DrawingLimits
from .models import DieSchedule, DrawingMode, DrawingSpec, InvalidSpec, PassReduction, PassStatus
from .solvers import bisect_decreasing

logger = logging.getLogger(__name__)

# Upper/lower ends of the first-pass reduction search, as fractions of area.
_RSTART_FLOOR = 0.001
_RSTART_CEILING = 0.90


def compute_reductions(entry_diameter: float, diameters: Sequence[float]) -> List[PassReduction]:
    """Return the area reduction (%) of every pass in ``diameters``.

    The first pass is measured against ``entry_diameter``, every later pass
    against the preceding die. A non-positive previous diameter yields a 0%
    reduction instead of an error so edited, half-typed sequences can still
    be displayed.
    """

    current = np.asarray(diameters, dtype=float)
    if current.size == 0:
        return []
    previous = np.concatenate(([float(entry_diameter)], current[:-1]))

    area_in = np.pi * (previous / 2.0) ** 2
    area_out = np.pi * (current / 2.0) ** 2
    with np.errstate(divide="ignore", invalid="ignore"):
        reduction = np.where(previous > 0, (area_in - area_out) / area_in * 100.0, 0.0)

    return [PassReduction(pass_index=i + 1, reduction_percent=float(r)) for i, r in enumerate(reduction)]


def schedule_progressive(spec: DrawingSpec, limits: DrawingLimits = DEFAULT_LIMITS) -> DieSchedule:
    """Return dies whose reductions fall linearly from the first pass to the target last pass."""

    spec.validate()
    if spec.pass_count == 1:
        return DieSchedule((float(spec.exit_diameter),))

    target_last = limits.target_last_reduction

    def final_diameter(r_start: float) -> float:
        steps = _progressive_reductions(r_start, target_last, spec.pass_count)
        return float(spec.entry_diameter * np.prod(np.sqrt(1.0 - steps)))

    # Flat schedule (no progressivity) decides on which side of the target r_start lies.
    if final_diameter(target_last) < spec.exit_diameter:
        low, high = _RSTART_FLOOR, target_last
    else:
        low, high = target_last, _RSTART_CEILING

    r_start = bisect_decreasing(
        final_diameter, spec.exit_diameter, low, high, iterations=limits.bisection_iterations
    )
    logger.debug(
        f"Progressive schedule {spec.entry_diameter} -> {spec.exit_diameter} mm "
        f"in {spec.pass_count} passes: first reduction {r_start:.4%}"
    )
    if not np.isclose(final_diameter(r_start), spec.exit_diameter, rtol=1e-6):
        logger.warning(
            f"First-pass reduction clamped at {r_start:.4%}; "
            f"the last die absorbs the remaining reduction to {spec.exit_diameter} mm."
        )
    if r_start <= target_last:
        logger.warning(
            f"First-pass reduction {r_start:.4%} does not exceed the last-pass target "
            f"{target_last:.4%}; reductions are not decreasing for this run."
        )

    steps = _progressive_reductions(r_start, target_last, spec.pass_count)
    dies = spec.entry_diameter * np.cumprod(np.sqrt(1.0 - steps))
    return _finalize(spec, dies, limits)


def schedule_uniform(spec: DrawingSpec, limits: DrawingLimits = DEFAULT_LIMITS) -> DieSchedule:
    """Return dies that remove the same share of area on every pass."""

    spec.validate()
    required_reduction = 1.0 - (spec.exit_diameter / spec.entry_diameter) ** (2.0 / spec.pass_count)
    logger.debug(f"Uniform schedule: {required_reduction:.4%} area reduction per pass")

    factors = np.full(spec.pass_count, np.sqrt(1.0 - required_reduction))
    dies = spec.entry_diameter * np.cumprod(factors)
    return _finalize(spec, dies, limits)


def schedule(spec: DrawingSpec, limits: DrawingLimits = DEFAULT_LIMITS) -> DieSchedule:
    """Dispatch to the scheduler matching ``spec.mode``."""

    if spec.mode == "uniform":
        return schedule_uniform(spec, limits)
    return schedule_progressive(spec, limits)


def classify_pass(
    reduction_percent: float,
    mode: DrawingMode,
    limits: DrawingLimits = DEFAULT_LIMITS,
) -> PassStatus:
    """Rate a single pass reduction (%) against the bands of ``mode``."""
    if mode == "progressive":
        if reduction_percent > limits.progressive_critical:
            return "Critical"
        if reduction_percent > limits.progressive_high:
            return "High"
        return "OK"
    if mode == "uniform":
        if reduction_percent > limits.uniform_high:
            return "High"
        if reduction_percent < limits.uniform_low:
            return "Low"
        return "OK"
    raise InvalidSpec(f"Unsupported drawing mode: {mode}")


def final_pass_exceeds_limit(
    reductions: Sequence[PassReduction],
    mode: DrawingMode,
    limits: DrawingLimits = DEFAULT_LIMITS,
) -> bool:
    """True when a progressive run finishes above the final-pass ceiling."""

    if mode != "progressive" or not reductions:
        return False
    return reductions[-1].reduction_percent > limits.progressive_final_max


def reference_lines(mode: DrawingMode, limits: DrawingLimits = DEFAULT_LIMITS) -> List[Tuple[float, str]]:
    """Limit lines ``(percent, label)`` drawn over the reduction chart."""

    if mode == "progressive":
        return [
            (limits.progressive_critical, f"Max initial ({limits.progressive_critical:g}%)"),
            (limits.progressive_final_max, f"Max final ({limits.progressive_final_max:g}%)"),
        ]
    return [
        (limits.uniform_high, f"Max ({limits.uniform_high:g}%)"),
        (limits.uniform_low, f"Min ({limits.uniform_low:g}%)"),
    ]


def resize_dies(diameters: Sequence[float], pass_count: int, entry_diameter: float) -> Tuple[float, ...]:
    """Trim or pad ``diameters`` to ``pass_count`` dies.

    New dies repeat the last one, or the entry diameter when there is none.
    """

    if pass_count < 0:
        raise InvalidSpec(f"Pass count must not be negative, got {pass_count}.")
    dies = [float(d) for d in diameters[:pass_count]]
    while len(dies) < pass_count:
        dies.append(dies[-1] if dies and dies[-1] else float(entry_diameter))
    return tuple(dies)


def replace_die(diameters: Sequence[float], index: int, value: float) -> Tuple[float, ...]:
    """Return a copy of ``diameters`` with the die at ``index`` (0-based) replaced."""

    if not 0 <= index < len(diameters):
        raise IndexError(f"Die index {index} out of range for {len(diameters)} passes.")
    dies = [float(d) for d in diameters]
    dies[index] = float(value)
    return tuple(dies)


def _progressive_reductions(r_start: float, target_last: float, pass_count: int) -> np.ndarray:
    t = np.arange(pass_count) / (pass_count - 1)
    return r_start * (1.0 - t) + target_last * t


def _finalize(spec: DrawingSpec, dies: np.ndarray, limits: DrawingLimits) -> DieSchedule:
    rounded = [round(float(d), limits.diameter_decimals) for d in dies]
    rounded[-1] = float(spec.exit_diameter)
    if any(later >= earlier for earlier, later in zip([spec.entry_diameter] + rounded, rounded)):
        raise InvalidSpec(
            f"{spec.pass_count} passes from {spec.entry_diameter} to {spec.exit_diameter} mm "
            f"do not reduce the wire on every pass at {limits.diameter_decimals} decimals."
        )
    return DieSchedule(tuple(rounded))
