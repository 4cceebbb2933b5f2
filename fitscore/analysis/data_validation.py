"""Input sanitation for biometric readings.

Readings outside physiological bounds are clamped rather than rejected, and
non-finite values are dropped to "missing" so that the scorers fall back to
their neutral defaults.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass, replace
from typing import Optional

from ..config import config
from .models import DailyBiometrics

logger = logging.getLogger(__name__)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def round_score(value: float, digits: int = 1) -> float:
    """Round half away from zero, the way scores are displayed.

    Python's round() uses banker's rounding, which would turn 6.25 into 6.2.
    """
    factor = 10 ** digits
    if value < 0:
        return -math.floor(-value * factor + 0.5) / factor
    return math.floor(value * factor + 0.5) / factor


def is_present(value: Optional[float]) -> bool:
    """True for a usable positive reading (None and 0 both mean 'no data')."""
    return value is not None and value > 0


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """Drop NaN and infinite readings to None."""
    if value is None or not np.isfinite(value):
        return None
    return float(value)


@dataclass
class ValidationResult:
    """Result of data validation check."""
    is_valid: bool
    reason: Optional[str] = None
    suggested_value: Optional[float] = None


class DataValidator:
    """Validator for daily biometric readings."""

    def __init__(self, bounds: dict = None):
        self.bounds = bounds or config.INPUT_BOUNDS

    def validate_metric(self, metric_name: str, value: Optional[float]) -> ValidationResult:
        """Validate a single reading.

        Args:
            metric_name: Field name on DailyBiometrics
            value: Reading to validate (None is always valid)

        Returns:
            ValidationResult; suggested_value holds the clamped reading
        """
        if value is None:
            return ValidationResult(True)

        if np.isnan(value) or np.isinf(value):
            return ValidationResult(False, "Invalid numeric value", suggested_value=None)

        if metric_name not in self.bounds:
            return ValidationResult(True)

        lower, upper = self.bounds[metric_name]
        if value < lower or value > upper:
            return ValidationResult(
                False,
                f"Value {value} outside physiological range [{lower}, {upper}]",
                suggested_value=float(np.clip(value, lower, upper)),
            )

        return ValidationResult(True)

    def sanitize_biometrics(self, biometrics: DailyBiometrics) -> DailyBiometrics:
        """Return a copy of biometrics with every reading inside its bounds."""
        changes = {}
        for metric_name in self.bounds:
            value = getattr(biometrics, metric_name, None)
            result = self.validate_metric(metric_name, value)
            if not result.is_valid:
                logger.debug(f"Replaced {metric_name} = {value} with {result.suggested_value}: {result.reason}")
                changes[metric_name] = result.suggested_value

        if not changes:
            return biometrics
        return replace(biometrics, **changes)


_validator = DataValidator()


def sanitize_biometrics(biometrics: DailyBiometrics) -> DailyBiometrics:
    """Clamp a day's readings using the configured bounds."""
    return _validator.sanitize_biometrics(biometrics)
