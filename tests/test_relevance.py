"""
Tests for profile-to-study relevance matching.
"""
import pytest

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.profile import UserProfile
from hormone_match.models.research import BirthControlKey, ConditionKey, CravingKey, SymptomKey
from hormone_match.services.constants import (
    BIRTH_CONTROL_ALIASES,
    CONDITION_ALIASES,
    SYMPTOM_ALIASES,
)
from hormone_match.services.relevance import (
    calculate_relevance_score,
    normalize_key,
    relevance_breakdown,
    resolve_key,
)

class TestKeyResolution:
    """Test suite for mapping survey strings onto relevance keys."""

    def test_normalize_key(self):
        assert normalize_key(" Breast tenderness ") == "breasttenderness"
        assert normalize_key("PCOS") == "pcos"

    @pytest.mark.parametrize("value, key_type, aliases, expected", [
        ("PCOS", ConditionKey, CONDITION_ALIASES, ConditionKey.PCOS),
        ("Hashimoto's", ConditionKey, CONDITION_ALIASES, ConditionKey.HYPOTHYROIDISM),
        ("Weight gain", SymptomKey, SYMPTOM_ALIASES, SymptomKey.WEIGHT_GAIN),
        ("Hair thinning", SymptomKey, SYMPTOM_ALIASES, SymptomKey.HAIR_LOSS),
        ("Mood swings", SymptomKey, SYMPTOM_ALIASES, SymptomKey.MOOD_CHANGES),
        ("No", BirthControlKey, BIRTH_CONTROL_ALIASES, BirthControlKey.NONE),
        ("Currently using", BirthControlKey, BIRTH_CONTROL_ALIASES, BirthControlKey.ON_OCP),
        ("Recently stopped", BirthControlKey, BIRTH_CONTROL_ALIASES, BirthControlKey.OFF_OCP),
        ("Sugar", CravingKey, {}, CravingKey.SUGAR),
    ])
    def test_resolves_known_values(self, value, key_type, aliases, expected):
        assert resolve_key(value, key_type, aliases) == expected

    @pytest.mark.parametrize("value", [None, "", "Migraines"])
    def test_unknown_values_resolve_to_none(self, value):
        assert resolve_key(value, SymptomKey, SYMPTOM_ALIASES) is None

class TestRelevanceScore:
    """Test suite for weighted relevance scoring."""

    def test_primary_imbalance(self, make_study, insulin_profile):
        study = make_study(hormone_relevance={"insulin": 9})
        assert calculate_relevance_score(insulin_profile, study) == pytest.approx(27)

    def test_secondary_imbalances(self, make_study):
        profile = UserProfile(
            primary_imbalance="androgens",
            secondary_imbalances=["insulin", "cortisol", "thyroid"],
            birth_control_status="Other",
        )
        study = make_study(hormone_relevance={"androgens": 9, "insulin": 7, "cortisol": 2, "thyroid": 10})
        breakdown = relevance_breakdown(profile, study)

        assert breakdown["primary_imbalance"] == pytest.approx(27)
        assert breakdown["secondary_imbalances"] == pytest.approx(18)

    def test_conditions_symptoms_and_cravings(self, make_study):
        profile = UserProfile(
            conditions=["PCOS", "Hashimoto's", "Endometriosis"],
            symptoms=["Acne", "Hair thinning", "Night sweats"],
            cravings=["Sugar", "Salt"],
            birth_control_status="Other",
        )
        study = make_study(
            condition_relevance={"pcos": 9, "hypothyroidism": 4},
            symptom_relevance={"acne": 8, "hairloss": 2},
            cravings_relevance={"sugar": 8},
        )
        breakdown = relevance_breakdown(profile, study)

        assert breakdown["conditions"] == pytest.approx(2.5 * 13)
        assert breakdown["symptoms"] == pytest.approx(1.5 * 10)
        assert breakdown["cravings"] == pytest.approx(8)

    def test_cycle_phase(self, make_study):
        study = make_study(cycle_phase_relevance={"luteal": 9, "follicular": 4})
        luteal = UserProfile(cycle_phase=CyclePhase.LUTEAL, birth_control_status="Other")
        ovulation = UserProfile(cycle_phase=CyclePhase.OVULATION, birth_control_status="Other")

        assert calculate_relevance_score(luteal, study) == pytest.approx(13.5)
        assert calculate_relevance_score(ovulation, study) == 0

    def test_unknown_cycle_phase_contributes_nothing(self, make_study):
        study = make_study(cycle_phase_relevance={"unknown": 10})
        profile = UserProfile(cycle_phase=CyclePhase.UNKNOWN, birth_control_status="Other")
        assert relevance_breakdown(profile, study)["cycle_phase"] == 0

    @pytest.mark.parametrize("status, expected", [
        ("No", 1.5 * 8),
        ("Currently using", 1.5 * 6),
        ("Recently stopped", 1.5 * 7),
        ("Something else", 0),
    ])
    def test_birth_control(self, make_study, status, expected):
        study = make_study(birth_control_relevance={"none": 8, "onocp": 6, "offocp": 7})
        profile = UserProfile(birth_control_status=status)
        assert relevance_breakdown(profile, study)["birth_control"] == pytest.approx(expected)

    def test_missing_keys_contribute_nothing(self, make_study):
        profile = UserProfile(
            primary_imbalance="estrogen",
            secondary_imbalances=["progesterone"],
            conditions=["PMDD"],
            symptoms=["Bloating"],
            cycle_phase=CyclePhase.MENSTRUAL,
            cravings=["Chocolate"],
        )
        assert calculate_relevance_score(profile, make_study()) == 0

    def test_score_is_sum_of_breakdown(self, make_study):
        profile = UserProfile(
            primary_imbalance="insulin",
            conditions=["PCOS"],
            cravings=["Sugar"],
            cycle_phase=CyclePhase.FOLLICULAR,
        )
        study = make_study(
            hormone_relevance={"insulin": 9},
            condition_relevance={"pcos": 9},
            cravings_relevance={"sugar": 8},
            cycle_phase_relevance={"follicular": 6},
            birth_control_relevance={"none": 8},
        )
        # 27 + 22.5 + 8 + 9 + 12
        assert calculate_relevance_score(profile, study) == pytest.approx(78.5)
        assert calculate_relevance_score(profile, study) == pytest.approx(
            sum(relevance_breakdown(profile, study).values())
        )
