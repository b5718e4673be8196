"""
Grape crop coefficient module.

Static single crop coefficients (Kc) per grape growth stage and a seasonal
water requirement estimate built on them. Irrigation method and soil type
never change Kc; they only shape the irrigation schedule.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..core import constants
from ..models import GrowthStage

GRAPE_KC_VALUES: Dict[GrowthStage, float] = {
    GrowthStage.DORMANT: 0.15,
    GrowthStage.BUDBREAK: 0.30,
    GrowthStage.FLOWERING: 0.70,
    GrowthStage.FRUIT_SET: 0.95,
    GrowthStage.VERAISON: 0.85,
    GrowthStage.HARVEST: 0.45,
    GrowthStage.POST_HARVEST: 0.60,
}

# Typical stage lengths for a full annual cycle (days)
STAGE_DURATION_DAYS: Dict[GrowthStage, int] = {
    GrowthStage.DORMANT: 90,
    GrowthStage.BUDBREAK: 30,
    GrowthStage.FLOWERING: 30,
    GrowthStage.FRUIT_SET: 60,
    GrowthStage.VERAISON: 60,
    GrowthStage.HARVEST: 30,
    GrowthStage.POST_HARVEST: 60,
}


@dataclass(frozen=True)
class StageRequirement:
    """Water requirement of one growth stage over a season."""

    stage: GrowthStage
    days: int
    kc: float
    total_etc: float  # mm over the stage
    description: str


class CropCoefficientResolver:
    """Resolve crop coefficients for grape growth stages."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize resolver.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def get_crop_coefficient(self, growth_stage: Union[str, GrowthStage]) -> float:
        """
        Look up Kc for a growth stage.

        Args:
            growth_stage: GrowthStage or its name

        Returns:
            Crop coefficient (dimensionless)

        Raises:
            ConfigurationError: If the stage is not supported
        """
        stage = GrowthStage.parse(growth_stage)
        kc = GRAPE_KC_VALUES[stage]
        self.logger.debug(f"Kc for {stage.value}: {kc:.2f}")
        return kc

    def seasonal_requirements(
        self,
        average_eto: float = constants.DEFAULT_SEASONAL_ETO
    ) -> List[StageRequirement]:
        """
        Estimate crop water use for each stage of an annual cycle.

        Args:
            average_eto: Average reference ET over the season (mm/day)

        Returns:
            One StageRequirement per growth stage, in phenological order
        """
        requirements = []
        for stage in GrowthStage:
            days = STAGE_DURATION_DAYS[stage]
            kc = GRAPE_KC_VALUES[stage]
            requirements.append(StageRequirement(
                stage=stage,
                days=days,
                kc=kc,
                total_etc=average_eto * kc * days,
                description=stage.description
            ))
        return requirements
