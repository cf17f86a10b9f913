"""Plain-text export report for calculator results."""

from __future__ import annotations

import math
import re
from datetime import date, datetime

from ..config import REPORT_FOOTER, REPORT_TITLE
from ..schemas import CalculationResult, CalculatorConfig, CylinderType

REPORT_DATE_FORMAT = "%d/%m/%Y"
EXPORT_FILENAME_TEMPLATE = "co2-calculator-results-{day}.txt"

# (pattern, captured field names) for each numeric line of the report.
_REPORT_FIELDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (r"^- Dimensions: (\S+)m × (\S+)m × (\S+)m$", ("length", "width", "height")),
    (r"^- Volume: (\S+) m³$", ("room_volume_m3",)),
    (r"^- Target CO₂: (\S+) ppm$", ("target_co2_ppm",)),
    (r"^- Schedule: (\S+)hrs/day, (\S+) days/week$", ("hours_per_day", "days_per_week")),
    (r"^- Daily CO₂: (\S+)g \((\S+)L\)$", ("daily_mass_grams", "daily_volume_liters")),
    (r"^- Weekly Usage: (\S+)g$", ("weekly_mass_grams",)),
    (r"^- Monthly Usage: (\S+)kg$", ("monthly_mass_kg",)),
    (
        r"^- Flow Rate: (\S+)g/hr \((\S+)L/min\)$",
        ("flow_rate_grams_per_hour", "flow_rate_liters_per_minute"),
    ),
    *(
        (rf"^- {re.escape(c.value)} Cylinder: (\S+) weeks$", (f"cylinder_{c.value}_weeks",))
        for c in CylinderType
    ),
)


class ReportParseError(ValueError):
    """Raised when an exported report is missing an expected line."""


def _plain_number(value: float) -> str:
    """Render a user-entered number without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _round_half_up(value: float) -> float | int:
    """Round to whole units; ``inf`` and ``nan`` pass through unchanged."""
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def format_report(
    config: CalculatorConfig,
    result: CalculationResult,
    generated_at: date | datetime,
) -> str:
    """Render configuration and results as the exportable text report.

    Field order and labels are stable so that exported files can be parsed
    back with :func:`parse_report`.
    """
    room = config.room
    schedule = config.schedule
    lines = [
        REPORT_TITLE,
        f"Generated: {generated_at.strftime(REPORT_DATE_FORMAT)}",
        "",
        "Room Specifications:",
        f"- Dimensions: {_plain_number(room.length)}m × {_plain_number(room.width)}m"
        f" × {_plain_number(room.height)}m",
        f"- Volume: {result.room_volume_m3:.1f} m³",
        f"- Target CO₂: {_plain_number(config.target_co2_ppm)} ppm",
        f"- Ventilation: {config.ventilation.value}",
        f"- Schedule: {schedule.hours_per_day}hrs/day, {schedule.days_per_week} days/week",
        "",
        "Calculated Requirements:",
        f"- Daily CO₂: {_round_half_up(result.daily_mass_grams)}g ({result.daily_volume_liters:.1f}L)",
        f"- Weekly Usage: {_round_half_up(result.weekly_mass_grams)}g",
        f"- Monthly Usage: {result.monthly_mass_kg:.2f}kg",
        f"- Flow Rate: {result.flow_rate_grams_per_hour:.1f}g/hr"
        f" ({result.flow_rate_liters_per_minute:.1f}L/min)",
        "",
        "Cylinder Duration:",
    ]
    for cylinder in CylinderType:
        weeks = result.cylinder_duration_weeks.get(cylinder, 0.0)
        lines.append(f"- {cylinder.value} Cylinder: {weeks:.1f} weeks")
    lines.extend(["", REPORT_FOOTER])
    return "\n".join(lines)


def export_filename(generated_at: date | datetime) -> str:
    """Download filename for a report generated on the given day."""
    return EXPORT_FILENAME_TEMPLATE.format(day=generated_at.strftime("%Y-%m-%d"))


def parse_report(text: str) -> dict[str, float]:
    """Recover the numeric fields of an exported report.

    Values come back at display precision. Raises :class:`ReportParseError`
    if any expected line is missing or holds a non-numeric value.
    """
    values: dict[str, float] = {}
    for pattern, names in _REPORT_FIELDS:
        match = re.search(pattern, text, flags=re.MULTILINE)
        if match is None:
            raise ReportParseError(f"Report line not found for: {', '.join(names)}")
        for name, raw in zip(names, match.groups()):
            try:
                values[name] = float(raw)
            except ValueError as exc:
                raise ReportParseError(f"Non-numeric value for {name}: '{raw}'") from exc
    return values
