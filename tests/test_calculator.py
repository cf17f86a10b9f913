"""Tests for co2calc.services.calculator — CO2CalculationEngine formulas."""

from __future__ import annotations

import pytest

from co2calc.config import EnrichmentConfig
from co2calc.schemas import (
    CalculatorConfig,
    CylinderType,
    RoomDimensions,
    Schedule,
    VentilationType,
)
from co2calc.services.calculator import CO2CalculationEngine

ENGINE = CO2CalculationEngine()


def _config(
    length: float = 4.0,
    width: float = 3.0,
    height: float = 2.5,
    target: float = 1200.0,
    ventilation: VentilationType = VentilationType.SEALED,
    hours: int = 12,
    days: int = 7,
) -> CalculatorConfig:
    return CalculatorConfig(
        room=RoomDimensions(length=length, width=width, height=height),
        target_co2_ppm=target,
        ventilation=ventilation,
        schedule=Schedule(hours_per_day=hours, days_per_week=days),
    )


class TestReferenceScenario:
    def test_sealed_room(self):
        result = ENGINE.calculate(_config())
        assert result.room_volume_m3 == pytest.approx(30.0)
        assert result.daily_mass_grams == pytest.approx(21.6)
        assert result.daily_volume_liters == pytest.approx(11.016)
        assert result.weekly_mass_grams == pytest.approx(151.2)
        assert result.monthly_mass_grams == pytest.approx(654.696)
        assert result.monthly_mass_kg == pytest.approx(0.654696)
        assert result.flow_rate_grams_per_hour == pytest.approx(1.8)
        assert result.flow_rate_liters_per_minute == pytest.approx(0.0153)
        assert result.bubbles_per_second_estimate == pytest.approx(0.0153 * 0.55)

    def test_enrichment_above_ambient(self):
        assert ENGINE.enrichment_ppm(_config()) == 800.0

    def test_exhausting_room_doubles_everything(self):
        sealed = ENGINE.calculate(_config())
        exhausting = ENGINE.calculate(_config(ventilation=VentilationType.EXHAUSTING))
        assert exhausting.daily_mass_grams == pytest.approx(43.2)
        assert exhausting.daily_mass_grams == 2 * sealed.daily_mass_grams
        assert exhausting.weekly_mass_grams == pytest.approx(2 * sealed.weekly_mass_grams)
        assert exhausting.flow_rate_grams_per_hour == pytest.approx(2 * sealed.flow_rate_grams_per_hour)
        assert exhausting.cylinder_duration_weeks[CylinderType.MEDIUM] == pytest.approx(
            sealed.cylinder_duration_weeks[CylinderType.MEDIUM] / 2
        )

    def test_all_cylinders_computed(self):
        durations = ENGINE.calculate(_config()).cylinder_duration_weeks
        assert set(durations) == set(CylinderType)
        assert durations[CylinderType.SMALL] == pytest.approx(6000 / 151.2)
        assert durations[CylinderType.MEDIUM] == pytest.approx(10000 / 151.2)
        assert durations[CylinderType.LARGE] == pytest.approx(20000 / 151.2)

    def test_selected_cylinder_does_not_change_figures(self):
        small = _config().model_copy(update={"cylinder": CylinderType.SMALL})
        large = _config().model_copy(update={"cylinder": CylinderType.LARGE})
        assert ENGINE.calculate(small) == ENGINE.calculate(large)


class TestRoomVolume:
    @pytest.mark.parametrize("dims", [(4.0, 3.0, 2.5), (2.5, 4.0, 3.0), (3.0, 2.5, 4.0)])
    def test_order_independent(self, dims):
        length, width, height = dims
        assert ENGINE.room_volume(_config(length, width, height)) == pytest.approx(30.0)

    def test_fractional_dimensions(self):
        assert ENGINE.room_volume(_config(1.2, 1.2, 2.0)) == pytest.approx(2.88)


class TestDailyMass:
    @pytest.mark.parametrize("target", [0.0, 250.0, 400.0])
    def test_zero_at_or_below_ambient(self, target):
        assert ENGINE.daily_mass_grams(_config(target=target)) == 0.0

    def test_monotonic_in_target(self):
        masses = [ENGINE.daily_mass_grams(_config(target=t)) for t in (300, 400, 800, 1000, 1200, 1500, 3000)]
        assert masses == sorted(masses)

    def test_scales_linearly_with_hours(self):
        full_day = ENGINE.daily_mass_grams(_config(hours=24))
        half_day = ENGINE.daily_mass_grams(_config(hours=12))
        assert full_day == pytest.approx(43.2)
        assert half_day == pytest.approx(full_day / 2)

    def test_negative_target_is_zero(self):
        assert ENGINE.daily_mass_grams(_config(target=-500)) == 0.0

    def test_custom_constants(self):
        engine = CO2CalculationEngine(EnrichmentConfig(ambient_co2_ppm=450.0))
        assert engine.enrichment_ppm(_config()) == 750.0


class TestDegenerateInput:
    def test_zero_length_yields_zero_result(self):
        result = ENGINE.calculate(_config(length=0.0))
        assert result.room_volume_m3 == 0.0
        assert result.daily_mass_grams == 0.0
        assert result.daily_volume_liters == 0.0
        assert result.weekly_mass_grams == 0.0
        assert result.monthly_mass_grams == 0.0
        assert result.flow_rate_grams_per_hour == 0.0
        assert result.flow_rate_liters_per_minute == 0.0
        assert result.bubbles_per_second_estimate == 0.0
        assert all(weeks == 0.0 for weeks in result.cylinder_duration_weeks.values())

    def test_negative_dimension_does_not_raise(self):
        result = ENGINE.calculate(_config(width=-3.0))
        assert result.room_volume_m3 == pytest.approx(-30.0)
        assert result.daily_mass_grams == 0.0

    def test_zero_hours(self):
        result = ENGINE.calculate(_config(hours=0))
        assert result.daily_mass_grams == 0.0
        assert result.flow_rate_grams_per_hour == 0.0

    def test_zero_days_gives_zero_cylinder_duration(self):
        result = ENGINE.calculate(_config(days=0))
        assert result.daily_mass_grams == pytest.approx(21.6)
        assert result.weekly_mass_grams == 0.0
        assert result.cylinder_duration_weeks[CylinderType.SMALL] == 0.0


class TestCylinderDuration:
    def test_non_increasing_in_weekly_usage(self):
        durations = [
            ENGINE.cylinder_duration_weeks(_config(days=d), CylinderType.MEDIUM) for d in range(1, 8)
        ]
        assert durations == sorted(durations, reverse=True)


class TestIdempotence:
    def test_repeated_calls_identical(self):
        config = _config(length=5.3, width=2.7, height=2.2, target=1350, hours=16, days=5)
        assert ENGINE.calculate(config) == ENGINE.calculate(config)


class TestWarningsAndNotes:
    def test_high_co2_threshold_is_exclusive(self):
        assert not ENGINE.is_high_co2(_config(target=1500))
        assert ENGINE.is_high_co2(_config(target=1501))

    def test_calculation_note_mentions_ventilation(self):
        assert "sealed room retention" in ENGINE.calculation_note(_config())
        note = ENGINE.calculation_note(_config(ventilation=VentilationType.EXHAUSTING))
        assert "active exhaust air changes" in note
        assert note.startswith("CO₂ enrichment calculated from ambient 400ppm")
