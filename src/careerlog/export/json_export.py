"""JSON export: the career log envelope, field for field."""

from __future__ import annotations

import json

from careerlog.services.schemas import CareerLog


def export_json(log: CareerLog) -> str:
    """Serialize a career log; ``CareerLog.model_validate_json`` reverses it."""
    return json.dumps(
        log.model_dump(mode="json"), indent=2, ensure_ascii=False
    )


def load_json(text: str) -> CareerLog:
    return CareerLog.model_validate_json(text)
