"""Configuration for CO₂ enrichment calculation constants."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EnrichmentConfig:
    """Physical and empirical constants for CO₂ supplementation estimates."""

    ambient_co2_ppm: float = 400.0
    mass_mg_per_m3_ppm: float = 1.8
    liters_per_gram: float = 0.51
    weeks_per_month: float = 4.33
    bubbles_per_liter_minute: float = 0.55
    exhaust_multiplier: float = 2.0
    baseline_hours: float = 24.0
    high_co2_threshold_ppm: float = 1500.0


DEFAULT_CONFIG = EnrichmentConfig()

CYLINDER_CAPACITY_GRAMS: dict[str, float] = {
    "6kg": 6000.0,
    "10kg": 10000.0,
    "20kg": 20000.0,
}

TARGET_PRESETS: dict[int, str] = {
    800: "Vegetative",
    1000: "Early Flower",
    1200: "Peak Flower",
    1500: "Maximum Safe",
}

REPORT_TITLE = "CO₂ Flow Estimator Results"
REPORT_FOOTER = "Generated by co2forplants.co.uk"
