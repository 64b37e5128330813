"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import datetime
from typing import Callable

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.profile import UserProfile
from hormone_match.models.research import ResearchStudy
from hormone_match.models.survey import SurveyResponses

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)
REFERENCE_YEAR = 2024

def build_study(**overrides) -> ResearchStudy:
    """Create a research study with neutral defaults."""
    record = {
        "id": "study",
        "title": "Test Study",
        "authors": ["Doe J"],
        "publication_year": REFERENCE_YEAR - 1,
        "journal": "Test Journal",
        "citation_count": 60,
        "study_type": "human",
        "participant_count": 150,
        "risk_bias_score": 2,
        "intervention_type": "food",
        "specific_intervention": "Eat more leafy greens daily for 8 weeks",
        "results": "Improved hormone markers",
    }
    record.update(overrides)
    return ResearchStudy.model_validate(record)

@pytest.fixture
def now() -> datetime:
    """Fixed reference time for cycle calculations."""
    return FIXED_NOW

@pytest.fixture
def empty_survey() -> SurveyResponses:
    """A survey that triggers no scoring rule."""
    return SurveyResponses(
        period="Yes",
        flow="Normal",
        energy="Steady energy",
        mood="No change",
        stress="Low",
        birth_control="No",
    )

@pytest.fixture
def pcos_survey() -> SurveyResponses:
    """Survey with missing periods, acne, fatigue and a PCOS diagnosis."""
    return SurveyResponses(
        period="No period",
        flow="Heavy",
        symptoms=["Acne"],
        energy="Constant fatigue",
        mood="Rage/anger",
        cravings=["Sugar"],
        stress="High",
        birth_control="No",
        conditions=["PCOS"],
    )

@pytest.fixture
def make_study() -> Callable[..., ResearchStudy]:
    return build_study

@pytest.fixture
def insulin_profile() -> UserProfile:
    """Profile whose primary imbalance is insulin."""
    return UserProfile(
        primary_imbalance="insulin",
        cycle_phase=CyclePhase.UNKNOWN,
        birth_control_status="Currently using",
    )
