"""
Service module for analysing a survey submission.

Runs the full scoring pipeline: cycle phase, symptom scoring, lab
adjustment and confidence evaluation.

Typical usage:
    result = analyze(survey, datetime.now(timezone.utc))
    print(result.primary_imbalance, result.confidence_level)
"""
from typing import List, Optional, Tuple
from datetime import datetime

from aws_lambda_powertools import Logger

from hormone_match.models.analysis import AnalysisResult
from hormone_match.models.hormone import HormoneScores, HormoneType
from hormone_match.models.survey import SurveyResponses
from hormone_match.services.confidence import evaluate_confidence
from hormone_match.services.constants import MAX_SECONDARY_IMBALANCES
from hormone_match.services.cycle import cycle_phase_from_survey
from hormone_match.services.labs import (
    adjust_scores_with_labs,
    interpret_lab_values,
    parse_lab_values,
)
from hormone_match.services.scoring import score_symptoms

logger = Logger()

def determine_imbalances(scores: HormoneScores) -> Tuple[Optional[HormoneType], List[HormoneType]]:
    """
    Pick the primary and secondary imbalances.

    Returns:
        Tuple of (highest positive hormone or None, up to two runners-up)

    Example:
        >>> determine_imbalances(HormoneScores(androgens=10, insulin=6, cortisol=6))
        (<HormoneType.ANDROGENS: 'androgens'>, [<HormoneType.CORTISOL: 'cortisol'>, <HormoneType.INSULIN: 'insulin'>])
    """
    ranked = [hormone for hormone, _ in scores.ranked()]
    if not ranked:
        return None, []
    return ranked[0], ranked[1:1 + MAX_SECONDARY_IMBALANCES]

def analyze(survey: SurveyResponses, now: Optional[datetime] = None) -> AnalysisResult:
    """
    Analyse survey answers and optional labs.

    Args:
        survey: Submitted questionnaire
        now: Reference time for the cycle phase, defaults to the current time

    Returns:
        AnalysisResult with scores, imbalances, confidence and explanations
    """
    if now is None:
        now = datetime.now()

    cycle_phase = cycle_phase_from_survey(survey, now)
    symptom_scores, explanations = score_symptoms(survey, cycle_phase)

    labs = parse_lab_values(survey.labs)
    scores, conflicts = adjust_scores_with_labs(symptom_scores, labs)

    primary, secondary = determine_imbalances(scores)
    total_score = scores.total
    confidence, confidence_notes = evaluate_confidence(total_score, cycle_phase, len(labs))

    explanations.extend(confidence_notes)
    explanations.extend(interpret_lab_values(labs))
    explanations.extend(conflicts)

    logger.info("Survey analysed", extra={
        "cycle_phase": cycle_phase.value,
        "primary_imbalance": primary.value if primary else None,
        "total_score": total_score,
        "confidence": confidence.value,
        "lab_count": len(labs)
    })

    return AnalysisResult(
        primary_imbalance=primary,
        secondary_imbalances=secondary,
        confidence_level=confidence,
        explanations=explanations,
        conflicts=conflicts,
        scores=scores,
        total_score=total_score,
        cycle_phase=cycle_phase,
        lab_count=len(labs)
    )
