"""
Service module for menstrual cycle phase calculations.

The phase is derived from the last period start, the regularity answer and
the cycle length. It is an input to symptom scoring: some symptoms are
expected in certain phases and are not counted there.

Typical usage:
    phase = cycle_phase_from_survey(survey, now)
    print(get_cycle_phase_display_name(phase))
"""
from typing import Optional
from datetime import date, datetime, time, timedelta

from aws_lambda_powertools import Logger

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.survey import PeriodRegularity, SurveyResponses
from hormone_match.services.constants import (
    CYCLE_PHASE_DESCRIPTIONS,
    CYCLE_PHASE_DISPLAY_NAMES,
    DEFAULT_CYCLE_LENGTH,
    LUTEAL_LENGTH,
    MAX_CYCLE_LENGTH,
    MENSTRUAL_DAYS,
    MIN_CYCLE_LENGTH,
    PHASE_NORMAL_SYMPTOMS,
)

logger = Logger()

def days_since_period_start(last_period_date: date, now: datetime) -> int:
    """
    Whole days elapsed since the start of the last period.

    The period is taken to start at midnight in the same timezone as ``now``;
    partial days are floored.
    """
    start = datetime.combine(last_period_date, time.min, tzinfo=now.tzinfo)
    return (now - start) // timedelta(days=1)

def calculate_cycle_phase(
    last_period_date: Optional[date],
    is_regular: bool,
    cycle_length: Optional[int] = DEFAULT_CYCLE_LENGTH,
    now: Optional[datetime] = None
) -> CyclePhase:
    """
    Calculate the current cycle phase.

    Args:
        last_period_date: Start date of the last period, if known
        is_regular: Whether the user reports a regular cycle
        cycle_length: Cycle length in days (21-45), defaults to 28
        now: Reference time, defaults to the current time

    Returns:
        The cycle phase, or UNKNOWN when it cannot be determined

    Example:
        >>> calculate_cycle_phase(date(2024, 1, 1), True, 28, datetime(2024, 1, 14))
        <CyclePhase.OVULATION: 'ovulation'>
    """
    if last_period_date is None or not is_regular:
        return CyclePhase.UNKNOWN

    if cycle_length is None:
        cycle_length = DEFAULT_CYCLE_LENGTH
    if not MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH:
        logger.warning("Cycle length out of range", extra={"cycle_length": cycle_length})
        return CyclePhase.UNKNOWN

    if now is None:
        now = datetime.now()

    days_since = days_since_period_start(last_period_date, now)
    if days_since < 0:
        logger.warning("Last period date is in the future", extra={
            "last_period_date": str(last_period_date),
            "now": now.isoformat()
        })
        return CyclePhase.UNKNOWN

    cycle_day = (days_since % cycle_length) + 1
    ovulation_day = cycle_length - LUTEAL_LENGTH

    if 1 <= cycle_day <= MENSTRUAL_DAYS:
        return CyclePhase.MENSTRUAL
    elif MENSTRUAL_DAYS + 1 <= cycle_day <= ovulation_day - 1:
        return CyclePhase.FOLLICULAR
    elif cycle_day == ovulation_day:
        return CyclePhase.OVULATION
    elif ovulation_day + 1 <= cycle_day <= cycle_length:
        return CyclePhase.LUTEAL

    return CyclePhase.UNKNOWN

def cycle_phase_from_survey(survey: SurveyResponses, now: Optional[datetime] = None) -> CyclePhase:
    """
    Derive the cycle phase from survey answers.

    Only a "Yes" regularity answer counts as a regular cycle, and the last
    period date is ignored when the user ticked "don't remember".
    """
    last_period = None if survey.dont_remember else survey.last_period
    is_regular = survey.period == PeriodRegularity.YES
    return calculate_cycle_phase(last_period, is_regular, survey.cycle_length, now)

def get_cycle_phase_display_name(phase: CyclePhase) -> str:
    return CYCLE_PHASE_DISPLAY_NAMES[CyclePhase(phase)]

def get_cycle_phase_description(phase: CyclePhase) -> str:
    """Describe what happens hormonally during a phase."""
    return CYCLE_PHASE_DESCRIPTIONS[CyclePhase(phase)]

def is_symptom_normal_for_phase(symptom: str, phase: CyclePhase) -> bool:
    """
    Check whether a symptom is expected during a phase.

    Example:
        >>> is_symptom_normal_for_phase("Bloating", CyclePhase.LUTEAL)
        True
    """
    return symptom.strip().lower() in PHASE_NORMAL_SYMPTOMS[CyclePhase(phase)]
