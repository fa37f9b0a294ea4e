from pathlib import Path

import pytest

from trefila_core.config import DEFAULT_LIMITS, DIAMETER_DECIMALS, DrawingLimits, load_limits, limits_from_mapping
from trefila_core.conversions import ConversionError


def test_defaults_match_shop_rules() -> None:
    assert DEFAULT_LIMITS.target_last_reduction == 0.18
    assert DEFAULT_LIMITS.bisection_iterations == 50
    assert DEFAULT_LIMITS.diameter_decimals == DIAMETER_DECIMALS == 3


def test_missing_config_file_yields_defaults(tmp_path) -> None:
    assert load_limits(str(tmp_path / "config.yaml")) == DEFAULT_LIMITS


def test_load_limits_overrides_section(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "trefila:\n  target_last_reduction: 0.17\n  diameter_decimals: 2\n  uniform_high: '24'\n"
        "other_section:\n  path: data.csv\n",
        encoding="utf-8",
    )
    limits = load_limits(str(path))

    assert limits.target_last_reduction == 0.17
    assert limits.diameter_decimals == 2
    assert limits.uniform_high == 24.0
    assert limits.progressive_critical == DEFAULT_LIMITS.progressive_critical


def test_config_without_section_yields_defaults(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("other_section:\n  path: data.csv\n", encoding="utf-8")

    assert load_limits(str(path)) == DEFAULT_LIMITS


@pytest.mark.parametrize(
    "raw",
    [
        {"max_speed": 3},
        {"uniform_low": "low"},
        {"target_last_reduction": 1.5},
        {"bisection_iterations": 0},
    ],
)
def test_limits_from_mapping_rejects_bad_values(raw: dict) -> None:
    with pytest.raises(ConversionError):
        limits_from_mapping(raw)


def test_invalid_yaml_raises_conversion_error(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("trefila: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConversionError):
        load_limits(str(path))


def test_limits_are_immutable() -> None:
    with pytest.raises(AttributeError):
        DrawingLimits().uniform_low = 10.0  # type: ignore[misc]


def test_shipped_config_matches_defaults() -> None:
    shipped = Path(__file__).resolve().parent.parent / "config.yaml"
    assert load_limits(str(shipped)) == DEFAULT_LIMITS
