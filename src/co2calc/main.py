"""FastAPI backend exposing the CO₂ flow estimator calculation endpoints."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from .config import CYLINDER_CAPACITY_GRAMS, TARGET_PRESETS
from .schemas import (
    CalculationResponse,
    CalculatorConfig,
    CylinderOption,
    CylinderType,
    PresetsResponse,
    TargetPreset,
    ValidationResponse,
)
from .services.calculator import CO2CalculationEngine
from .services.report import export_filename, format_report
from .services.validator import has_valid_inputs, validate_config

logger = logging.getLogger(__name__)

app = FastAPI(title="CO2 Flow Estimator API", version="0.1.0")
engine = CO2CalculationEngine()


def evaluate(config: CalculatorConfig) -> CalculationResponse:
    """Run the validate → compute sequence for one configuration snapshot."""
    errors = validate_config(config)
    if errors:
        logger.info("Configuration has %d invalid field(s): %s", len(errors), ", ".join(errors))
    result = engine.calculate(config)
    return CalculationResponse(
        config=config,
        errors=errors,
        has_valid_inputs=has_valid_inputs(errors, result.room_volume_m3),
        high_co2_warning=engine.is_high_co2(config),
        calculation_note=engine.calculation_note(config),
        selected_cylinder=config.cylinder,
        result=result,
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Service health endpoint."""
    return {"status": "ok"}


@app.get("/v1/presets", response_model=PresetsResponse)
def presets() -> PresetsResponse:
    """Target presets, cylinder sizes and form defaults."""
    return PresetsResponse(
        targets=[TargetPreset(ppm=ppm, label=label) for ppm, label in TARGET_PRESETS.items()],
        cylinders=[
            CylinderOption(cylinder=cylinder, capacity_grams=CYLINDER_CAPACITY_GRAMS[cylinder.value])
            for cylinder in CylinderType
        ],
        defaults=CalculatorConfig(),
    )


@app.post("/v1/validate", response_model=ValidationResponse)
def validate(request: CalculatorConfig) -> ValidationResponse:
    """Return per-field range errors for a configuration."""
    errors = validate_config(request)
    return ValidationResponse(errors=errors, valid=not errors)


@app.post("/v1/calculate", response_model=CalculationResponse)
def calculate(request: CalculatorConfig) -> CalculationResponse:
    """Validate and compute CO₂ requirements; results are returned even when invalid."""
    return evaluate(request)


@app.post("/v1/export", response_class=PlainTextResponse)
def export(request: CalculatorConfig) -> PlainTextResponse:
    """Render the plain-text results report as a download."""
    today = date.today()
    evaluation = evaluate(request)
    if not evaluation.has_valid_inputs:
        logger.warning("Exporting report for configuration with invalid inputs")
    body = format_report(request, evaluation.result, today)
    filename = export_filename(today)
    logger.info("Exported report %s", filename)
    return PlainTextResponse(
        body,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
