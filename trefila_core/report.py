"""Tabular views of a die schedule for display and Excel export."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .config import DEFAULT_LIMITS, DrawingLimits
from .engine import classify_pass, compute_reductions, final_pass_exceeds_limit
from .models import DrawingSpec

SCHEDULE_COLUMNS = ["pass", "diameter_mm", "reduction_pct", "status"]


def schedule_table(
    spec: DrawingSpec,
    diameters: Sequence[float],
    limits: DrawingLimits = DEFAULT_LIMITS,
) -> pd.DataFrame:
    """One row per pass: die diameter, area reduction and its status.

    ``diameters`` may be a computed schedule or a hand-edited one.
    """

    reductions = compute_reductions(spec.entry_diameter, diameters)
    rows = [
        {
            "pass": red.pass_index,
            "diameter_mm": float(die),
            "reduction_pct": red.reduction_percent,
            "status": classify_pass(red.reduction_percent, spec.mode, limits),
        }
        for die, red in zip(diameters, reductions)
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def summary_frame(
    spec: DrawingSpec,
    diameters: Sequence[float],
    limits: DrawingLimits = DEFAULT_LIMITS,
) -> pd.DataFrame:
    reductions = compute_reductions(spec.entry_diameter, diameters)
    return pd.DataFrame(
        [
            {
                "entry_mm": spec.entry_diameter,
                "exit_mm": spec.exit_diameter,
                "passes": spec.pass_count,
                "mode": spec.mode,
                "final_pass_over_limit": final_pass_exceeds_limit(reductions, spec.mode, limits),
            }
        ]
    )


def write_schedule_workbook(
    path: str,
    spec: DrawingSpec,
    diameters: Sequence[float],
    limits: DrawingLimits = DEFAULT_LIMITS,
) -> None:
    """Write a ``Summary`` and a ``Passes`` sheet to an ``.xlsx`` file."""

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        summary_frame(spec, diameters, limits).to_excel(writer, sheet_name="Summary", index=False)
        schedule_table(spec, diameters, limits).to_excel(writer, sheet_name="Passes", index=False)
