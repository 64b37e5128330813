"""
Constants and shared data for scoring and recommendation services.
"""
from typing import Dict, List, Tuple

from hormone_match.models.analysis import ConfidenceLevel
from hormone_match.models.cycle import CyclePhase
from hormone_match.models.recommendation import Intensity, RecommendationCategory
from hormone_match.models.research import (
    BirthControlKey,
    ConditionKey,
    CravingKey,
    StudyType,
    SymptomKey,
)

DEFAULT_CYCLE_LENGTH = 28
MIN_CYCLE_LENGTH = 21
MAX_CYCLE_LENGTH = 45
MENSTRUAL_DAYS = 5
LUTEAL_LENGTH = 14

CYCLE_PHASE_DISPLAY_NAMES = {
    CyclePhase.MENSTRUAL: "Menstrual",
    CyclePhase.FOLLICULAR: "Follicular",
    CyclePhase.OVULATION: "Ovulation",
    CyclePhase.LUTEAL: "Luteal",
    CyclePhase.UNKNOWN: "Unknown",
}

CYCLE_PHASE_DESCRIPTIONS = {
    CyclePhase.MENSTRUAL: "Period phase - estrogen and progesterone are low",
    CyclePhase.FOLLICULAR: "Pre-ovulation phase - estrogen rises, preparing for ovulation",
    CyclePhase.OVULATION: "Ovulation occurs - egg is released, estrogen peaks",
    CyclePhase.LUTEAL: "Post-ovulation phase - progesterone rises, preparing for potential pregnancy",
    CyclePhase.UNKNOWN: "Unable to determine cycle phase",
}

# Symptoms expected in a phase and therefore not diagnostic on their own
PHASE_NORMAL_SYMPTOMS: Dict[CyclePhase, List[str]] = {
    CyclePhase.MENSTRUAL: ["cramps", "fatigue", "mood changes"],
    CyclePhase.FOLLICULAR: [],
    CyclePhase.OVULATION: ["mid-cycle pain", "increased libido"],
    CyclePhase.LUTEAL: ["bloating", "breast tenderness", "mood swings", "cravings"],
    CyclePhase.UNKNOWN: [],
}

# Confidence
HIGH_CONFIDENCE_THRESHOLD = 15
MEDIUM_CONFIDENCE_THRESHOLD = 8
LABS_FOR_HIGH_CONFIDENCE = 3
UNKNOWN_PHASE_EXPLANATION = "Cycle phase unknown - some symptoms may be normal for your cycle phase"

CONFIDENCE_THRESHOLDS: List[Tuple[int, ConfidenceLevel]] = [
    (HIGH_CONFIDENCE_THRESHOLD, ConfidenceLevel.HIGH),
    (MEDIUM_CONFIDENCE_THRESHOLD, ConfidenceLevel.MEDIUM),
]

# Relevance multipliers
PRIMARY_IMBALANCE_WEIGHT = 3.0
SECONDARY_IMBALANCE_WEIGHT = 2.0
CONDITION_WEIGHT = 2.5
SYMPTOM_WEIGHT = 1.5
CYCLE_PHASE_WEIGHT = 1.5
BIRTH_CONTROL_WEIGHT = 1.5
CRAVING_WEIGHT = 1.0
MAX_SECONDARY_IMBALANCES = 2

# Survey answers whose normalised form differs from the corpus key
CONDITION_ALIASES: Dict[str, ConditionKey] = {
    "hashimoto's": ConditionKey.HYPOTHYROIDISM,
    "hashimotos": ConditionKey.HYPOTHYROIDISM,
    "graves": ConditionKey.HYPERTHYROIDISM,
    "graves'": ConditionKey.HYPERTHYROIDISM,
}

SYMPTOM_ALIASES: Dict[str, SymptomKey] = {
    "hairthinning": SymptomKey.HAIR_LOSS,
    "moodswings": SymptomKey.MOOD_CHANGES,
}

BIRTH_CONTROL_ALIASES: Dict[str, BirthControlKey] = {
    "no": BirthControlKey.NONE,
    "currentlyusing": BirthControlKey.ON_OCP,
    "recentlystopped": BirthControlKey.OFF_OCP,
}

CRAVING_ALIASES: Dict[str, CravingKey] = {}

# Quality scoring tiers, checked in order
RECENCY_POINTS: List[Tuple[int, int]] = [(5, 3), (10, 2), (20, 1)]
STUDY_TYPE_POINTS = {
    StudyType.HUMAN: 3,
    StudyType.REVIEW: 2,
    StudyType.ANIMAL: 1,
}
CITATION_POINTS: List[Tuple[int, int]] = [(50, 3), (20, 2), (10, 1)]
PARTICIPANT_POINTS: List[Tuple[int, int]] = [(100, 2), (50, 1)]
MAX_RISK_BIAS = 10

# Ranking
RELEVANCE_SHARE = 0.7
QUALITY_SHARE = 0.3
MIN_TOTAL_SCORE = 5
MAX_RECOMMENDATIONS_PER_CATEGORY = 3
HIGH_PRIORITY_RELEVANCE = 20
MEDIUM_PRIORITY_RELEVANCE = 10
TITLE_WORDS = 3

CATEGORY_DEFAULTS = {
    RecommendationCategory.FOOD: {
        "frequency": "daily",
        "duration": None,
        "intensity": Intensity.MODERATE,
        "expected_timeline": "6-8 weeks",
    },
    RecommendationCategory.MOVEMENT: {
        "frequency": "3x per week",
        "duration": "20 minutes",
        "intensity": Intensity.LOW,
        "expected_timeline": "4-6 weeks",
    },
    RecommendationCategory.MINDFULNESS: {
        "frequency": "daily",
        "duration": "10-15 minutes",
        "intensity": Intensity.LOW,
        "expected_timeline": "6-8 weeks",
    },
}

FALLBACK_ACTIONS = {
    RecommendationCategory.FOOD: "Try incorporating more whole foods and reducing processed foods",
    RecommendationCategory.MOVEMENT: "Start with gentle walking for 10-15 minutes daily",
    RecommendationCategory.MINDFULNESS: "Practice deep breathing exercises for 5-10 minutes daily",
}
FALLBACK_SUMMARY = "General recommendation based on hormone health principles"
FALLBACK_TIMELINE = "4-6 weeks"
FALLBACK_FREQUENCY = "daily"
FALLBACK_RELEVANCE_SCORE = 5
