"""Pydantic schemas for the REST API."""

from cutstock.web.schemas.responses import (
    ErrorDetailSchema,
    MaterialFailureSchema,
    MaterialOutcomeSchema,
    MaterialResultSchema,
    MetricsSchema,
    PlacementSchema,
    StrategiesSchema,
    UnplacedSchema,
)

__all__ = [
    "ErrorDetailSchema",
    "MaterialFailureSchema",
    "MaterialOutcomeSchema",
    "MaterialResultSchema",
    "MetricsSchema",
    "PlacementSchema",
    "StrategiesSchema",
    "UnplacedSchema",
]
