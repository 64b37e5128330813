"""
Confidence evaluation for a scored survey.
"""
from typing import List, Tuple

from hormone_match.models.analysis import ConfidenceLevel
from hormone_match.models.cycle import CyclePhase
from hormone_match.services.constants import (
    CONFIDENCE_THRESHOLDS,
    LABS_FOR_HIGH_CONFIDENCE,
    UNKNOWN_PHASE_EXPLANATION,
)

def base_confidence(total_score: int) -> ConfidenceLevel:
    for threshold, level in CONFIDENCE_THRESHOLDS:
        if total_score >= threshold:
            return level
    return ConfidenceLevel.LOW

def evaluate_confidence(
    total_score: int,
    cycle_phase: CyclePhase,
    lab_count: int
) -> Tuple[ConfidenceLevel, List[str]]:
    """
    Derive the confidence label for an analysis.

    The unknown-phase downgrade is applied before the lab upgrades, so lab
    results can partly offset a missing cycle phase.

    Args:
        total_score: Sum of all hormone scores
        cycle_phase: Phase used during scoring
        lab_count: Number of usable lab values

    Returns:
        Tuple of (confidence level, explanations added by this step)
    """
    level = base_confidence(total_score)
    explanations: List[str] = []

    if cycle_phase == CyclePhase.UNKNOWN:
        level = level.downgrade()
        explanations.append(UNKNOWN_PHASE_EXPLANATION)

    if lab_count > 0:
        if level == ConfidenceLevel.LOW:
            level = ConfidenceLevel.MEDIUM
        if lab_count >= LABS_FOR_HIGH_CONFIDENCE and level == ConfidenceLevel.MEDIUM:
            level = ConfidenceLevel.HIGH

    return level, explanations
