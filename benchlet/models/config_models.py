"""Run configuration model."""

from pydantic import BaseModel, Field

from benchlet.meter.timer import TimeUnit
from benchlet.utils.env import get_env


class RunConfig(BaseModel):
    """Configuration for one benchmark run."""

    default_runs: int = Field(
        1, ge=1, description="Runs per benchmark method unless its decorator says otherwise"
    )
    time_unit: TimeUnit = Field(
        TimeUnit.MILLISECONDS, description="Unit of the default TimeMeter"
    )
    stop_on_error: bool = Field(
        False, description="Abort the run at the first failing element"
    )
    parallel: bool = Field(
        False, description="Run different benchmark classes in parallel threads"
    )
    max_workers: int | None = Field(
        None, ge=1, description="Thread pool size when parallel (default: one per class)"
    )
    log_level: str | None = Field(
        None, description="Log level used when logging is not configured yet"
    )

    @classmethod
    def from_env(cls) -> "RunConfig":
        """Build a configuration from BENCHLET_* environment variables."""
        defaults = cls()
        return cls(
            default_runs=get_env("BENCHLET_RUNS", default=defaults.default_runs, as_type=int),
            time_unit=get_env(
                "BENCHLET_TIME_UNIT", default=defaults.time_unit, as_type=TimeUnit
            ),
            stop_on_error=get_env(
                "BENCHLET_STOP_ON_ERROR", default=defaults.stop_on_error, as_type=bool
            ),
            parallel=get_env("BENCHLET_PARALLEL", default=defaults.parallel, as_type=bool),
            max_workers=get_env("BENCHLET_MAX_WORKERS", as_type=int),
            log_level=get_env("BENCHLET_LOG_LEVEL"),
        )
