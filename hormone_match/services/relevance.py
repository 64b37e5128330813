"""
Relevance matching between a user profile and a research study.

Profile values are free-form survey strings. They are normalised and resolved
to the closed keys used by study relevance maps; anything that does not
resolve weighs nothing.
"""
import re
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Type, TypeVar

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.hormone import HormoneType
from hormone_match.models.profile import UserProfile
from hormone_match.models.research import (
    BirthControlKey,
    ConditionKey,
    CravingKey,
    ResearchStudy,
    SymptomKey,
)
from hormone_match.services.constants import (
    BIRTH_CONTROL_ALIASES,
    BIRTH_CONTROL_WEIGHT,
    CONDITION_ALIASES,
    CONDITION_WEIGHT,
    CRAVING_ALIASES,
    CRAVING_WEIGHT,
    CYCLE_PHASE_WEIGHT,
    MAX_SECONDARY_IMBALANCES,
    PRIMARY_IMBALANCE_WEIGHT,
    SECONDARY_IMBALANCE_WEIGHT,
    SYMPTOM_ALIASES,
    SYMPTOM_WEIGHT,
)

K = TypeVar("K", bound=Enum)

_WHITESPACE = re.compile(r"\s+")

def normalize_key(value: str) -> str:
    """
    Lowercase a survey value and drop all whitespace.

    Example:
        >>> normalize_key(" Breast tenderness ")
        'breasttenderness'
    """
    return _WHITESPACE.sub("", value.lower())

def resolve_key(value: Optional[str], key_type: Type[K], aliases: Mapping[str, K]) -> Optional[K]:
    """
    Resolve a survey value to a relevance key.

    Returns None when the value matches neither a key nor an alias.
    """
    if not value:
        return None
    normalized = normalize_key(value)
    if normalized in aliases:
        return aliases[normalized]
    try:
        return key_type(normalized)
    except ValueError:
        return None

def _weight(weights: Mapping[K, float], key: Optional[K]) -> float:
    if key is None:
        return 0.0
    return weights.get(key, 0.0)

def _sum_weights(
    weights: Mapping[K, float],
    values: Iterable[str],
    key_type: Type[K],
    aliases: Mapping[str, K]
) -> float:
    return sum(_weight(weights, resolve_key(value, key_type, aliases)) for value in values)

def relevance_breakdown(profile: UserProfile, study: ResearchStudy) -> Dict[str, float]:
    """
    Weighted contribution of each matching dimension.

    Args:
        profile: User profile to match
        study: Candidate study

    Returns:
        Mapping of dimension name to its weighted contribution
    """
    primary = 0.0
    if profile.primary_imbalance is not None:
        primary = _weight(study.hormone_relevance, HormoneType(profile.primary_imbalance))

    secondary = sum(
        _weight(study.hormone_relevance, HormoneType(hormone))
        for hormone in profile.secondary_imbalances[:MAX_SECONDARY_IMBALANCES]
    )

    cycle_phase = 0.0
    if profile.cycle_phase != CyclePhase.UNKNOWN:
        cycle_phase = _weight(study.cycle_phase_relevance, CyclePhase(profile.cycle_phase))

    return {
        "primary_imbalance": primary * PRIMARY_IMBALANCE_WEIGHT,
        "secondary_imbalances": secondary * SECONDARY_IMBALANCE_WEIGHT,
        "conditions": CONDITION_WEIGHT * _sum_weights(
            study.condition_relevance, profile.conditions, ConditionKey, CONDITION_ALIASES
        ),
        "symptoms": SYMPTOM_WEIGHT * _sum_weights(
            study.symptom_relevance, profile.symptoms, SymptomKey, SYMPTOM_ALIASES
        ),
        "cycle_phase": cycle_phase * CYCLE_PHASE_WEIGHT,
        "birth_control": BIRTH_CONTROL_WEIGHT * _weight(
            study.birth_control_relevance,
            resolve_key(profile.birth_control_status, BirthControlKey, BIRTH_CONTROL_ALIASES)
        ),
        "cravings": CRAVING_WEIGHT * _sum_weights(
            study.cravings_relevance, profile.cravings, CravingKey, CRAVING_ALIASES
        ),
    }

def calculate_relevance_score(profile: UserProfile, study: ResearchStudy) -> float:
    """Total relevance of a study for a user profile."""
    return sum(relevance_breakdown(profile, study).values())
