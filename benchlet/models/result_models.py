"""Pydantic models for result export."""

from pydantic import BaseModel, Field


class MeterModel(BaseModel):
    """A meter registered for the run."""

    name: str = Field(..., description="Meter name (e.g., 'TimeMeter')")
    unit: str = Field(..., description="Short unit symbol (e.g., 'ms')")
    unit_description: str = Field(..., description="Human-readable unit name")


class MeterValuesModel(BaseModel):
    """Values one meter collected for one method."""

    meter: str = Field(..., description="Meter name")
    unit: str = Field(..., description="Short unit symbol")
    values: list[float] = Field(
        default_factory=list, description="One value per successful invocation"
    )


class MethodResultModel(BaseModel):
    """Collected values of one benchmark method."""

    name: str = Field(..., description="Method name")
    invocations: int = Field(..., ge=0, description="Successful invocations")
    failures: int = Field(0, ge=0, description="Invocations that raised")
    values: list[MeterValuesModel] = Field(default_factory=list)


class ClassResultModel(BaseModel):
    """Method results of one benchmarked class."""

    name: str = Field(..., description="Qualified class name")
    module: str = Field(..., description="Module defining the class")
    methods: list[MethodResultModel] = Field(default_factory=list)


class ErrorModel(BaseModel):
    """An error recorded during the run."""

    location: str = Field(..., description="'Class.method' the error belongs to")
    role: str = Field(..., description="Lifecycle role of the failing method")
    error_type: str = Field(..., description="Error class name")
    message: str


class RunMetadata(BaseModel):
    """Timestamps and version of the run."""

    timestamp_start: str
    timestamp_end: str | None = None
    benchlet_version: str


class RunResultModel(BaseModel):
    """Complete result tree of a run."""

    metadata: RunMetadata
    meters: list[MeterModel] = Field(default_factory=list)
    classes: list[ClassResultModel] = Field(default_factory=list)
    errors: list[ErrorModel] = Field(default_factory=list)
