"""
Error types for the CO2 analysis pipeline.

Every error names the pipeline component that raised it and carries the
offending input in ``context`` so a single log line is enough to diagnose a
failed run.
"""
from typing import Any, Dict, Optional


class PipelineError(ValueError):
    """Base exception for invalid pipeline input.

    Attributes:
        component: Pipeline component that rejected the input
        message: Human-readable description
        context: Offending values, for debugging
    """

    component: str = "Pipeline"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        text = f"[{self.component}] {self.message}"
        if self.context:
            text += f" (input: {self.context})"
        return text


# ---------------------------
# Series Loader
# ---------------------------


class InvalidCadence(PipelineError):
    """Declared cadence is not monthly."""

    component = "Series Loader"


class LengthMismatch(PipelineError):
    """Declared series length differs from the number of values."""

    component = "Series Loader"


class MissingValue(PipelineError):
    """Series contains an absent observation."""

    component = "Series Loader"


class NonMonotoneTimestamps(PipelineError):
    """Timestamps are not strictly increasing one month apart."""

    component = "Series Loader"


class NonPositiveValue(PipelineError):
    """Series contains a zero or negative concentration."""

    component = "Series Loader"


# ---------------------------
# Horizon Builder
# ---------------------------


class UnknownFrequency(PipelineError):
    """Horizon frequency outside the supported set."""

    component = "Horizon Builder"


class InvalidHorizon(PipelineError):
    """Horizon period count is negative or not an integer."""

    component = "Horizon Builder"


# ---------------------------
# Period Regressor
# ---------------------------


class EmptySubset(PipelineError):
    """Regression window selects no rows."""

    component = "Period Regressor"


class DegenerateFit(PipelineError):
    """Regression window selects fewer than two rows."""

    component = "Period Regressor"
