"""Range checks gating whether calculator results are shown."""

from __future__ import annotations

from typing import Callable, NamedTuple

from ..schemas import CalculatorConfig


class FieldRule(NamedTuple):
    """Upper-bounded positive range for one input field."""

    field: str
    upper: float
    message: str
    getter: Callable[[CalculatorConfig], float]


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("length", 50, "Length must be between 0.1 and 50 meters", lambda c: c.room.length),
    FieldRule("width", 50, "Width must be between 0.1 and 50 meters", lambda c: c.room.width),
    FieldRule("height", 10, "Height must be between 0.1 and 10 meters", lambda c: c.room.height),
    FieldRule(
        "hoursPerDay", 24, "Hours per day must be between 1 and 24", lambda c: c.schedule.hours_per_day
    ),
    FieldRule(
        "daysPerWeek", 7, "Days per week must be between 1 and 7", lambda c: c.schedule.days_per_week
    ),
)


def validate_config(config: CalculatorConfig) -> dict[str, str]:
    """Return field identifier → message for every out-of-range field.

    An empty mapping means the configuration is valid. Target CO₂, ventilation
    and cylinder are accepted as-is.
    """
    errors: dict[str, str] = {}
    for rule in FIELD_RULES:
        value = rule.getter(config)
        if value <= 0 or value > rule.upper:
            errors[rule.field] = rule.message
    return errors


def has_valid_inputs(errors: dict[str, str], room_volume_m3: float) -> bool:
    """Results are displayable only with no errors and a positive volume."""
    return not errors and room_volume_m3 > 0
