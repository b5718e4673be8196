"""
Calendar heuristic for grape growth stages.

A rough month-based guess for northern-hemisphere table grapes, used only to
pre-fill the growth stage when the grower does not provide one. The ETc
calculator never calls this; it always takes the stage explicitly.
"""

from datetime import date
from typing import Dict

from ..models import GrowthStage

MONTH_TO_STAGE: Dict[int, GrowthStage] = {
    month: stage
    for stage in GrowthStage
    for month in stage.season
}


def infer_growth_stage(on_date: date) -> GrowthStage:
    """
    Guess the growth stage from the calendar month.

    Args:
        on_date: Calendar date at the farm

    Returns:
        GrowthStage typical for that month
    """
    return MONTH_TO_STAGE[on_date.month]
