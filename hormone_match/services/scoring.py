"""
Symptom scoring service.

Converts a survey submission into per-hormone scores using an ordered table
of independent rules. Each rule adds fixed points to one or more hormone axes
and contributes one explanation when it fires. Rules never subtract, so the
final scores do not depend on rule order; the explanation list does, and it
follows the questionnaire order.

Typical usage:
    >>> scores, explanations = score_symptoms(survey, CyclePhase.FOLLICULAR)
    >>> scores.androgens
    3
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from aws_lambda_powertools import Logger

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.hormone import HormoneScores, HormoneType
from hormone_match.models.survey import (
    BirthControlStatus,
    EnergyPattern,
    FlowType,
    MoodPattern,
    PeriodRegularity,
    StressLevel,
    SurveyResponses,
)

logger = Logger()

Predicate = Callable[[SurveyResponses, CyclePhase], bool]

@dataclass(frozen=True)
class ScoringRule:
    """
    A single symptom rule.

    Attributes:
        name: Stable identifier used in logs and tests
        question: Questionnaire item the rule reads
        applies: Predicate over the survey and cycle phase
        points: Points added per hormone when the rule fires
        explanation: Text appended when the rule fires, if any
    """
    name: str
    question: str
    applies: Predicate
    points: Dict[HormoneType, int] = field(default_factory=dict)
    explanation: Optional[str] = None

def _normalise(value: str) -> str:
    return value.strip().lower()

def _contains(values: Iterable[str], *options: str) -> bool:
    wanted = {_normalise(option) for option in options}
    return any(_normalise(value) in wanted for value in values)

def answer_is(attribute: str, expected) -> Predicate:
    """Rule predicate: a single-choice answer equals ``expected``."""
    return lambda survey, phase: getattr(survey, attribute) == expected

def selected(attribute: str, *options: str) -> Predicate:
    """Rule predicate: any of ``options`` was ticked in a multi-choice answer."""
    return lambda survey, phase: _contains(getattr(survey, attribute), *options)

def selected_outside_phase(attribute: str, option: str, phase_to_skip: CyclePhase) -> Predicate:
    """Rule predicate: ``option`` was ticked and the user is not in ``phase_to_skip``."""
    return lambda survey, phase: phase != phase_to_skip and _contains(getattr(survey, attribute), option)


SYMPTOM_RULES: Tuple[ScoringRule, ...] = (
    # Q1: period regularity
    ScoringRule(
        "no_period", "q1_period",
        answer_is("period", PeriodRegularity.NO_PERIOD),
        {HormoneType.ANDROGENS: 3, HormoneType.ESTROGEN: 2},
        "Missing periods can indicate low estrogen or high androgens",
    ),
    ScoringRule(
        "irregular_period", "q1_period",
        answer_is("period", PeriodRegularity.NO),
        {HormoneType.PROGESTERONE: 2},
        "Irregular periods often indicate progesterone deficiency",
    ),
    # Q3: flow
    ScoringRule(
        "heavy_flow", "q3_flow",
        answer_is("flow", FlowType.HEAVY),
        {HormoneType.ESTROGEN: 3},
        "Heavy periods can indicate estrogen dominance",
    ),
    ScoringRule(
        "light_flow", "q3_flow",
        answer_is("flow", FlowType.LIGHT),
        {HormoneType.ESTROGEN: 2},
        "Light periods may indicate low estrogen",
    ),
    ScoringRule(
        "painful_flow", "q3_flow",
        answer_is("flow", FlowType.PAINFUL),
        {HormoneType.PROGESTERONE: 2, HormoneType.ESTROGEN: 1},
        "Painful periods often indicate progesterone deficiency and inflammation",
    ),
    # Q4: symptoms
    ScoringRule(
        "acne", "q4_symptoms",
        selected("symptoms", "Acne"),
        {HormoneType.ANDROGENS: 3},
        "Acne is strongly associated with high androgen levels",
    ),
    ScoringRule(
        "hair_loss", "q4_symptoms",
        selected("symptoms", "Hair loss", "Hair thinning"),
        {HormoneType.ANDROGENS: 2, HormoneType.THYROID: 1},
        "Hair loss can indicate high androgens or thyroid issues",
    ),
    # Bloating and breast tenderness are expected before a period
    ScoringRule(
        "bloating", "q4_symptoms",
        selected_outside_phase("symptoms", "Bloating", CyclePhase.LUTEAL),
        {HormoneType.ESTROGEN: 2},
        "Bloating outside of PMS can indicate estrogen dominance",
    ),
    ScoringRule(
        "breast_tenderness", "q4_symptoms",
        selected_outside_phase("symptoms", "Breast tenderness", CyclePhase.LUTEAL),
        {HormoneType.ESTROGEN: 2},
        "Breast tenderness outside of PMS can indicate estrogen dominance",
    ),
    # Q5: energy
    ScoringRule(
        "morning_fatigue", "q5_energy",
        answer_is("energy", EnergyPattern.MORNING_FATIGUE),
        {HormoneType.CORTISOL: 3},
        "Morning fatigue often indicates cortisol/adrenal issues",
    ),
    ScoringRule(
        "afternoon_crash", "q5_energy",
        answer_is("energy", EnergyPattern.AFTERNOON_CRASH),
        {HormoneType.INSULIN: 2, HormoneType.CORTISOL: 1},
        "Afternoon crashes often indicate blood sugar/insulin issues",
    ),
    ScoringRule(
        "constant_fatigue", "q5_energy",
        answer_is("energy", EnergyPattern.CONSTANT_FATIGUE),
        {HormoneType.THYROID: 3, HormoneType.CORTISOL: 2},
        "Constant fatigue strongly suggests thyroid or adrenal issues",
    ),
    # Q6: mood
    ScoringRule(
        "rage", "q6_mood",
        answer_is("mood", MoodPattern.RAGE),
        {HormoneType.PROGESTERONE: 3},
        "Rage and anger are classic signs of progesterone deficiency",
    ),
    ScoringRule(
        "irritable", "q6_mood",
        answer_is("mood", MoodPattern.IRRITABLE),
        {HormoneType.PROGESTERONE: 2},
        "Irritability can indicate progesterone deficiency",
    ),
    ScoringRule(
        "sad", "q6_mood",
        answer_is("mood", MoodPattern.SAD),
        {HormoneType.THYROID: 2, HormoneType.PROGESTERONE: 1},
        "Depression can indicate thyroid issues or hormone imbalances",
    ),
    # Q7: cravings
    ScoringRule(
        "sugar_craving", "q7_cravings",
        selected("cravings", "Sugar"),
        {HormoneType.INSULIN: 3},
        "Sugar cravings strongly indicate insulin resistance",
    ),
    ScoringRule(
        "chocolate_craving", "q7_cravings",
        selected("cravings", "Chocolate"),
        {HormoneType.PROGESTERONE: 2},
        "Chocolate cravings often indicate progesterone deficiency",
    ),
    ScoringRule(
        "salt_craving", "q7_cravings",
        selected("cravings", "Salt"),
        {HormoneType.CORTISOL: 2},
        "Salt cravings can indicate adrenal/cortisol issues",
    ),
    # Q8: stress
    ScoringRule(
        "high_stress", "q8_stress",
        answer_is("stress", StressLevel.HIGH),
        {HormoneType.CORTISOL: 3, HormoneType.PROGESTERONE: 1},
        "High stress increases cortisol and can deplete progesterone",
    ),
    ScoringRule(
        "moderate_stress", "q8_stress",
        answer_is("stress", StressLevel.MODERATE),
        {HormoneType.CORTISOL: 1},
    ),
    # Q9: birth control
    ScoringRule(
        "stopped_birth_control", "q9_birth_control",
        answer_is("birth_control", BirthControlStatus.RECENTLY_STOPPED),
        {HormoneType.ANDROGENS: 2, HormoneType.ESTROGEN: 1},
        "Stopping birth control can cause temporary androgen rebound",
    ),
    # Q10: diagnosed conditions
    ScoringRule(
        "pcos", "q10_conditions",
        selected("conditions", "PCOS"),
        {HormoneType.ANDROGENS: 4, HormoneType.INSULIN: 3},
        "PCOS is characterized by high androgens and insulin resistance",
    ),
    ScoringRule(
        "pmdd", "q10_conditions",
        selected("conditions", "PMDD"),
        {HormoneType.PROGESTERONE: 3},
        "PMDD is strongly linked to progesterone sensitivity",
    ),
    ScoringRule(
        "hashimotos", "q10_conditions",
        selected("conditions", "Hashimoto's"),
        {HormoneType.THYROID: 4},
        "Hashimoto's is an autoimmune thyroid condition",
    ),
)

def score_symptoms(
    survey: SurveyResponses,
    cycle_phase: CyclePhase,
    rules: Iterable[ScoringRule] = SYMPTOM_RULES
) -> Tuple[HormoneScores, List[str]]:
    """
    Score survey answers into per-hormone points.

    Args:
        survey: Submitted questionnaire
        cycle_phase: Phase used to suppress expected symptoms
        rules: Rule table, defaults to SYMPTOM_RULES

    Returns:
        Tuple of (hormone scores, explanations in rule order)
    """
    scores = HormoneScores()
    explanations: List[str] = []

    for rule in rules:
        if not rule.applies(survey, cycle_phase):
            continue
        for hormone, points in rule.points.items():
            scores.add(hormone, points)
        if rule.explanation:
            explanations.append(rule.explanation)
        logger.debug("Symptom rule fired", extra={
            "rule": rule.name,
            "question": rule.question,
            "points": {h.value: p for h, p in rule.points.items()}
        })

    return scores, explanations
