"""Pydantic models for configuration and result export."""

from benchlet.models.config_models import RunConfig
from benchlet.models.result_models import (
    ClassResultModel,
    ErrorModel,
    MeterModel,
    MeterValuesModel,
    MethodResultModel,
    RunMetadata,
    RunResultModel,
)

__all__ = [
    "ClassResultModel",
    "ErrorModel",
    "MeterModel",
    "MeterValuesModel",
    "MethodResultModel",
    "RunConfig",
    "RunMetadata",
    "RunResultModel",
]
