"""
Tests for cycle phase calculation.
"""
import pytest
from datetime import date, datetime, timezone

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.survey import SurveyResponses
from hormone_match.services.cycle import (
    calculate_cycle_phase,
    cycle_phase_from_survey,
    days_since_period_start,
    get_cycle_phase_description,
    get_cycle_phase_display_name,
    is_symptom_normal_for_phase,
)

NOW = datetime(2024, 6, 15, 12, 0, 0)

@pytest.mark.parametrize("last_period, expected", [
    (date(2024, 6, 15), CyclePhase.MENSTRUAL),   # day 1
    (date(2024, 6, 11), CyclePhase.MENSTRUAL),   # day 5
    (date(2024, 6, 10), CyclePhase.FOLLICULAR),  # day 6
    (date(2024, 6, 3), CyclePhase.FOLLICULAR),   # day 13
    (date(2024, 6, 2), CyclePhase.OVULATION),    # day 14
    (date(2024, 6, 1), CyclePhase.LUTEAL),       # day 15
    (date(2024, 5, 19), CyclePhase.LUTEAL),      # day 28
    (date(2024, 5, 18), CyclePhase.MENSTRUAL),   # day 1 of the next cycle
])
def test_phase_boundaries_for_28_day_cycle(last_period, expected):
    """Test each phase boundary of a default cycle."""
    assert calculate_cycle_phase(last_period, True, 28, NOW) == expected

def test_ovulation_moves_with_cycle_length():
    """Test that ovulation is 14 days before the end of a longer cycle."""
    # 35-day cycle ovulates on day 21
    assert calculate_cycle_phase(date(2024, 5, 26), True, 35, NOW) == CyclePhase.OVULATION
    assert calculate_cycle_phase(date(2024, 5, 27), True, 35, NOW) == CyclePhase.FOLLICULAR
    assert calculate_cycle_phase(date(2024, 5, 25), True, 35, NOW) == CyclePhase.LUTEAL

def test_missing_cycle_length_defaults_to_28():
    assert calculate_cycle_phase(date(2024, 6, 2), True, None, NOW) == CyclePhase.OVULATION

def test_unknown_without_date_or_regular_cycle():
    """Test that missing or irregular cycle data yields an unknown phase."""
    assert calculate_cycle_phase(None, True, 28, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 2), False, 28, NOW) == CyclePhase.UNKNOWN

def test_degenerate_inputs_fall_through_to_unknown():
    """Test that bad cycle lengths and future dates never raise."""
    assert calculate_cycle_phase(date(2024, 6, 2), True, 0, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 2), True, -5, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 2), True, 20, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 2), True, 46, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 10), True, 10, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 5), True, 200, NOW) == CyclePhase.UNKNOWN
    assert calculate_cycle_phase(date(2024, 6, 20), True, 28, NOW) == CyclePhase.UNKNOWN

def test_partial_days_are_floored():
    assert days_since_period_start(date(2024, 6, 14), datetime(2024, 6, 15, 23, 59)) == 1
    assert days_since_period_start(date(2024, 6, 15), datetime(2024, 6, 15, 0, 30)) == 0

def test_timezone_aware_now():
    now = datetime(2024, 6, 15, 8, 0, tzinfo=timezone.utc)
    assert days_since_period_start(date(2024, 6, 1), now) == 14
    assert calculate_cycle_phase(date(2024, 6, 1), True, 28, now) == CyclePhase.LUTEAL

def test_calculation_is_deterministic():
    results = {calculate_cycle_phase(date(2024, 6, 2), True, 28, NOW) for _ in range(5)}
    assert results == {CyclePhase.OVULATION}

def test_phase_from_survey():
    """Test survey answers are translated into calculator inputs."""
    survey = SurveyResponses(period="Yes", cycle_length=28, last_period=date(2024, 6, 2))
    assert cycle_phase_from_survey(survey, NOW) == CyclePhase.OVULATION

    irregular = SurveyResponses(period="No", cycle_length=28, last_period=date(2024, 6, 2))
    assert cycle_phase_from_survey(irregular, NOW) == CyclePhase.UNKNOWN

    forgotten = SurveyResponses(period="Yes", last_period=date(2024, 6, 2), dont_remember=True)
    assert cycle_phase_from_survey(forgotten, NOW) == CyclePhase.UNKNOWN

def test_phase_from_survey_with_blank_answers():
    """Test that blank form fields are treated as unanswered."""
    survey = SurveyResponses(period="Yes", cycle_length="", last_period="2024-06-02")
    assert survey.cycle_length is None
    assert cycle_phase_from_survey(survey, NOW) == CyclePhase.OVULATION

def test_display_names_and_descriptions():
    assert get_cycle_phase_display_name(CyclePhase.LUTEAL) == "Luteal"
    assert get_cycle_phase_display_name("unknown") == "Unknown"
    assert "estrogen peaks" in get_cycle_phase_description(CyclePhase.OVULATION)

def test_symptom_normal_for_phase():
    assert is_symptom_normal_for_phase("Bloating", CyclePhase.LUTEAL)
    assert is_symptom_normal_for_phase("cramps", CyclePhase.MENSTRUAL)
    assert not is_symptom_normal_for_phase("Bloating", CyclePhase.FOLLICULAR)
    assert not is_symptom_normal_for_phase("Acne", CyclePhase.UNKNOWN)

@pytest.mark.parametrize("cycle_length, last_period, expected", [
    (21, date(2024, 6, 9), CyclePhase.OVULATION),
    (45, date(2024, 5, 16), CyclePhase.OVULATION),
])
def test_cycle_length_bounds_are_inclusive(cycle_length, last_period, expected):
    assert calculate_cycle_phase(last_period, True, cycle_length, NOW) == expected

def test_out_of_range_survey_cycle_length_is_unknown():
    survey = SurveyResponses(period="Yes", cycle_length=60, last_period=date(2024, 6, 2))
    assert cycle_phase_from_survey(survey, NOW) == CyclePhase.UNKNOWN
