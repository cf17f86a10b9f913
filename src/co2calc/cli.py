"""Command-line entrypoint: validate, compute and export one calculation."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path

from .schemas import CalculatorConfig, CylinderType, RoomDimensions, Schedule, VentilationType
from .services.calculator import CO2CalculationEngine
from .services.report import export_filename, format_report
from .services.validator import has_valid_inputs, validate_config

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "CO2CALC_LOG_LEVEL"


def configure_logging() -> None:
    """Configure console logging; level comes from ``CO2CALC_LOG_LEVEL``."""
    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "INFO").upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def build_config(args: argparse.Namespace) -> CalculatorConfig:
    """Snapshot parsed arguments; unparseable numbers become zero."""
    return CalculatorConfig(
        room=RoomDimensions(length=args.length, width=args.width, height=args.height),
        target_co2_ppm=args.target,
        ventilation=VentilationType(args.ventilation),
        cylinder=CylinderType(args.cylinder),
        schedule=Schedule(hours_per_day=args.hours, days_per_week=args.days),
    )


def _write_report(output: Path, report: str, today: date) -> Path:
    target = output / export_filename(today) if output.is_dir() else output
    target.write_text(report + "\n", encoding="utf-8")
    return target


# --- CLI --------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    defaults = CalculatorConfig()
    p = argparse.ArgumentParser(prog="co2calc", description="Estimate CO₂ enrichment for a grow room.")
    p.add_argument("--length", default=str(defaults.room.length), help="Room length (m).")
    p.add_argument("--width", default=str(defaults.room.width), help="Room width (m).")
    p.add_argument("--height", default=str(defaults.room.height), help="Room height (m).")
    p.add_argument("--target", default=str(defaults.target_co2_ppm), help="Target CO₂ (ppm).")
    p.add_argument(
        "--ventilation",
        choices=[v.value for v in VentilationType],
        default=defaults.ventilation.value,
    )
    p.add_argument(
        "--cylinder",
        choices=[c.value for c in CylinderType],
        default=defaults.cylinder.value,
        help="Cylinder size highlighted in the summary.",
    )
    p.add_argument("--hours", default=str(defaults.schedule.hours_per_day), help="Hours per day.")
    p.add_argument("--days", default=str(defaults.schedule.days_per_week), help="Days per week.")
    p.add_argument(
        "--output",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write the report to PATH (a directory gets the default export filename).",
    )
    p.add_argument("--strict", action="store_true", help="Exit with status 1 on validation errors.")
    return p


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, run validate → compute → format, and emit the report."""
    configure_logging()
    args = _build_parser().parse_args(argv)
    config = build_config(args)
    engine = CO2CalculationEngine()

    errors = validate_config(config)
    for field, message in errors.items():
        logger.error("[%s] %s", field, message)
    if errors and args.strict:
        sys.exit(1)

    result = engine.calculate(config)
    if not has_valid_inputs(errors, result.room_volume_m3):
        logger.warning("Inputs are invalid; figures below are not reliable.")
    if engine.is_high_co2(config):
        logger.warning(
            "High CO₂ warning: %s ppm exceeds %s ppm. Ensure proper ventilation and monitoring.",
            config.target_co2_ppm,
            engine.config.high_co2_threshold_ppm,
        )

    logger.info(
        "Volume=%.1f m³  daily=%.1f g  flow=%.1f g/hr  %s cylinder=%.1f weeks",
        result.room_volume_m3,
        result.daily_mass_grams,
        result.flow_rate_grams_per_hour,
        config.cylinder.value,
        result.cylinder_duration_weeks[config.cylinder],
    )

    today = date.today()
    report = format_report(config, result, today)
    if args.output is None:
        print(report)
        return

    try:
        written = _write_report(args.output, report, today)
    except OSError:
        logger.exception("Could not write report to %s", args.output)
        sys.exit(1)
    logger.info("Report written to %s", written)


if __name__ == "__main__":
    main()
