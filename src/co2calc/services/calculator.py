"""Deterministic CO₂ enrichment model for sealed and exhausting grow rooms."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import CYLINDER_CAPACITY_GRAMS, DEFAULT_CONFIG, EnrichmentConfig
from ..schemas import CalculationResult, CalculatorConfig, CylinderType, VentilationType


@dataclass
class CO2CalculationEngine:
    """Pure calculation engine mapping a calculator snapshot to CO₂ figures.

    Degenerate input (zero volume, zero run time, target below ambient) yields
    zero-valued figures instead of raising; gating on validity is left to the
    caller.
    """

    config: EnrichmentConfig = DEFAULT_CONFIG

    def room_volume(self, calc: CalculatorConfig) -> float:
        """Room volume in cubic metres."""
        room = calc.room
        return room.length * room.width * room.height

    def enrichment_ppm(self, calc: CalculatorConfig) -> float:
        """Concentration rise above ambient, clamped at zero."""
        return max(0.0, calc.target_co2_ppm - self.config.ambient_co2_ppm)

    def daily_mass_grams(self, calc: CalculatorConfig) -> float:
        """CO₂ mass needed per day of operation.

        The base figure assumes a 24-hour day and is scaled linearly to the
        configured hours.
        """
        volume = self.room_volume(calc)
        hours_per_day = calc.schedule.hours_per_day
        if volume <= 0 or calc.target_co2_ppm <= 0 or hours_per_day <= 0:
            return 0.0

        mass = (volume * self.enrichment_ppm(calc) * self.config.mass_mg_per_m3_ppm) / 1000
        if calc.ventilation == VentilationType.EXHAUSTING:
            mass *= self.config.exhaust_multiplier
        return (mass * hours_per_day) / self.config.baseline_hours

    def daily_volume_liters(self, calc: CalculatorConfig) -> float:
        return self.daily_mass_grams(calc) * self.config.liters_per_gram

    def weekly_mass_grams(self, calc: CalculatorConfig) -> float:
        return self.daily_mass_grams(calc) * calc.schedule.days_per_week

    def monthly_mass_grams(self, calc: CalculatorConfig) -> float:
        """Monthly usage in grams, using an average month length in weeks."""
        return self.weekly_mass_grams(calc) * self.config.weeks_per_month

    def flow_rate_grams_per_hour(self, calc: CalculatorConfig) -> float:
        hours_per_day = calc.schedule.hours_per_day
        if hours_per_day <= 0:
            return 0.0
        return self.daily_mass_grams(calc) / hours_per_day

    def flow_rate_liters_per_minute(self, calc: CalculatorConfig) -> float:
        return (self.flow_rate_grams_per_hour(calc) * self.config.liters_per_gram) / 60

    def bubbles_per_second(self, calc: CalculatorConfig) -> float:
        """Approximate bubble counter rate; varies by diffuser type."""
        return self.flow_rate_liters_per_minute(calc) * self.config.bubbles_per_liter_minute

    def cylinder_duration_weeks(self, calc: CalculatorConfig, cylinder: CylinderType) -> float:
        """Weeks a full cylinder lasts at the configured weekly usage."""
        weekly = self.weekly_mass_grams(calc)
        if weekly <= 0:
            return 0.0
        return CYLINDER_CAPACITY_GRAMS[cylinder.value] / weekly

    def is_high_co2(self, calc: CalculatorConfig) -> bool:
        """Whether the target exceeds the safe occupancy threshold."""
        return calc.target_co2_ppm > self.config.high_co2_threshold_ppm

    def calculation_note(self, calc: CalculatorConfig) -> str:
        if calc.ventilation == VentilationType.EXHAUSTING:
            accounts_for = "active exhaust air changes"
        else:
            accounts_for = "sealed room retention"
        return (
            f"CO₂ enrichment calculated from ambient {self.config.ambient_co2_ppm:g}ppm "
            f"to target level. Accounts for {accounts_for}."
        )

    def calculate(self, calc: CalculatorConfig) -> CalculationResult:
        """Compute every derived figure for one configuration snapshot."""
        return CalculationResult(
            room_volume_m3=self.room_volume(calc),
            daily_mass_grams=self.daily_mass_grams(calc),
            daily_volume_liters=self.daily_volume_liters(calc),
            weekly_mass_grams=self.weekly_mass_grams(calc),
            monthly_mass_grams=self.monthly_mass_grams(calc),
            flow_rate_grams_per_hour=self.flow_rate_grams_per_hour(calc),
            flow_rate_liters_per_minute=self.flow_rate_liters_per_minute(calc),
            bubbles_per_second_estimate=self.bubbles_per_second(calc),
            cylinder_duration_weeks={
                cylinder: self.cylinder_duration_weeks(calc, cylinder) for cylinder in CylinderType
            },
        )
