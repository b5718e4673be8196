"""
Reference ET cross-validation module.

Compares a locally computed ETo with a third-party reference value (e.g. the
Open-Meteo FAO Penman-Monteith ET0) for the same location and date.
"""

import logging
from typing import Optional

from ..core import constants
from ..models import ValidationResult


class CrossValidator:
    """Compare computed ETo against an external reference ETo."""

    def __init__(
        self,
        tolerance_pct: float = constants.VALIDATION_TOLERANCE_PCT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize validator.

        Args:
            tolerance_pct: Largest absolute percentage error still considered accurate
            logger: Logger instance
        """
        self.tolerance_pct = tolerance_pct
        self.logger = logger or logging.getLogger(__name__)

    def validate(
        self,
        computed_eto: float,
        reference_eto: Optional[float]
    ) -> Optional[ValidationResult]:
        """
        Compare computed ETo with the reference.

        Args:
            computed_eto: ETo from the local engine (mm/day)
            reference_eto: External reference ETo (mm/day), or None

        Returns:
            ValidationResult, or None when no usable reference is available
        """
        if reference_eto is None:
            self.logger.debug("No reference ETo supplied; skipping cross-validation")
            return None

        if reference_eto <= 0:
            self.logger.warning(
                f"Reference ETo {reference_eto} is not positive; skipping cross-validation"
            )
            return None

        difference = computed_eto - reference_eto
        percentage_error = difference / reference_eto * 100
        is_accurate = abs(percentage_error) <= self.tolerance_pct

        if is_accurate:
            recommendation = (
                f"Calculation is within {self.tolerance_pct:g}% of the reference ETo"
            )
        elif percentage_error > 0:
            recommendation = "Calculation is higher than the reference - check radiation inputs"
        else:
            recommendation = "Calculation is lower than the reference - check wind/humidity inputs"

        self.logger.info(
            f"Cross-validation: computed={computed_eto:.2f}, reference={reference_eto:.2f}, "
            f"error={percentage_error:+.1f}% ({'accurate' if is_accurate else 'deviation'})"
        )

        return ValidationResult(
            computed_eto=round(computed_eto, 2),
            reference_eto=round(reference_eto, 2),
            difference=round(difference, 2),
            percentage_error=round(percentage_error, 1),
            is_accurate=is_accurate,
            recommendation=recommendation
        )
