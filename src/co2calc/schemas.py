"""Pydantic models for calculator configuration, results and API payloads."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def coerce_float(value: Any) -> float:
    """Coerce raw input to a finite float, falling back to ``0.0``.

    Strings are read up to their longest numeric prefix, so ``"2.5m"`` becomes
    ``2.5`` and ``"abc"`` becomes ``0.0``.
    """
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        value = float(match.group()) if match else 0.0
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def coerce_int(value: Any) -> int:
    """Coerce raw input to an int (truncating toward zero), falling back to ``0``."""
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group()) if match else 0
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


class VentilationType(str, Enum):
    """How the grow room exchanges air."""

    SEALED = "sealed"
    EXHAUSTING = "exhausting"


class CylinderType(str, Enum):
    """Fixed nominal CO₂ cylinder sizes."""

    SMALL = "6kg"
    MEDIUM = "10kg"
    LARGE = "20kg"


class RoomDimensions(BaseModel):
    """Grow room dimensions in metres."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(default=4.0, examples=[4.0])
    width: float = Field(default=3.0, examples=[3.0])
    height: float = Field(default=2.5, examples=[2.5])

    @field_validator("length", "width", "height", mode="before")
    @classmethod
    def _coerce_dimension(cls, v: Any) -> float:
        return coerce_float(v)


class Schedule(BaseModel):
    """Daily and weekly enrichment run time."""

    model_config = ConfigDict(frozen=True)

    hours_per_day: int = Field(default=12, examples=[12])
    days_per_week: int = Field(default=7, examples=[7])

    @field_validator("hours_per_day", "days_per_week", mode="before")
    @classmethod
    def _coerce_count(cls, v: Any) -> int:
        return coerce_int(v)


class CalculatorConfig(BaseModel):
    """Immutable snapshot of every calculator input."""

    model_config = ConfigDict(frozen=True)

    room: RoomDimensions = Field(default_factory=RoomDimensions)
    target_co2_ppm: float = Field(default=1200.0, examples=[1200.0])
    ventilation: VentilationType = VentilationType.SEALED
    cylinder: CylinderType = CylinderType.MEDIUM
    schedule: Schedule = Field(default_factory=Schedule)

    @field_validator("target_co2_ppm", mode="before")
    @classmethod
    def _coerce_target(cls, v: Any) -> float:
        return coerce_float(v)


class CalculationResult(BaseModel):
    """Figures derived from one ``CalculatorConfig``."""

    model_config = ConfigDict(frozen=True)

    room_volume_m3: float
    daily_mass_grams: float
    daily_volume_liters: float
    weekly_mass_grams: float
    monthly_mass_grams: float
    flow_rate_grams_per_hour: float
    flow_rate_liters_per_minute: float
    bubbles_per_second_estimate: float
    cylinder_duration_weeks: dict[CylinderType, float]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def monthly_mass_kg(self) -> float:
        """Monthly usage converted to kilograms for display."""
        return self.monthly_mass_grams / 1000.0


class ValidationResponse(BaseModel):
    """Per-field validation outcome."""

    errors: dict[str, str]
    valid: bool


class CalculationResponse(BaseModel):
    """Validation, warnings and results for one configuration snapshot."""

    config: CalculatorConfig
    errors: dict[str, str]
    has_valid_inputs: bool
    high_co2_warning: bool
    calculation_note: str
    selected_cylinder: CylinderType
    result: CalculationResult


class TargetPreset(BaseModel):
    """Suggested CO₂ target for a growth stage."""

    ppm: int
    label: str


class CylinderOption(BaseModel):
    """Cylinder size with its fixed capacity."""

    cylinder: CylinderType
    capacity_grams: float


class PresetsResponse(BaseModel):
    """Static choices offered to the calculator form."""

    targets: list[TargetPreset]
    cylinders: list[CylinderOption]
    defaults: CalculatorConfig
