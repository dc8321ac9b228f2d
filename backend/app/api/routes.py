"""HTTP routes for the Flask API."""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.app.errors import BadRequestError
from backend.core.projection import simulate
from backend.core.simulation import ProjectionSummary, run_simulation
from backend.schemas.simulation import (
    PingResponse,
    ProjectionIn,
    ProjectionPointOut,
    ProjectionResponse,
    SimulationIn,
    SimulationResponse,
    SummaryOut,
)

LOGGER = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    LOGGER.warning("invalid payload: %d error(s)", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


def _json_payload() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise BadRequestError("request body must be a JSON object")
    return payload


def _as_of_year() -> int:
    """First simulated year: pinned by config or the current UTC year."""
    pinned = current_app.config.get("AS_OF_YEAR")
    return pinned if pinned is not None else datetime.now(timezone.utc).year


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Run the projection engine alone and summarise the curve."""
    payload = ProjectionIn.model_validate(_json_payload())
    projection_request = payload.to_request(current_app.config["DEFAULT_HORIZON_END_YEAR"])

    points = simulate(projection_request, as_of_year=_as_of_year())
    summary = ProjectionSummary.from_projection(payload.initialWealth, points)

    response = ProjectionResponse(
        projectionData=[ProjectionPointOut.from_point(point) for point in points],
        summary=SummaryOut.from_summary(summary),
    )
    return jsonify(response.model_dump())


@api_bp.post("/simulations")
def create_simulation() -> Any:
    """Project, score against the client's goals and suggest next steps."""
    payload = SimulationIn.model_validate(_json_payload())
    as_of_year = _as_of_year()

    outcome = run_simulation(
        payload.to_request(current_app.config["DEFAULT_HORIZON_END_YEAR"]),
        payload.to_goals(),
        as_of_year=as_of_year,
    )
    LOGGER.info(
        "simulation %r: score=%.2f (%s), %d suggestion(s)",
        payload.title,
        outcome.alignment_score,
        outcome.category.key,
        len(outcome.suggestions),
    )

    response = SimulationResponse.from_outcome(payload, outcome, as_of_year)
    return jsonify(response.model_dump()), HTTPStatus.CREATED
