"""
Analysis result model produced by the scoring pipeline.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.hormone import HormoneScores, HormoneType

class ConfidenceLevel(str, Enum):
    """
    How much weight the analysis can bear, ordered low to high.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_ORDER.index(self)

    def downgrade(self) -> "ConfidenceLevel":
        return _CONFIDENCE_ORDER[max(0, self.rank - 1)]

_CONFIDENCE_ORDER = [ConfidenceLevel.LOW, ConfidenceLevel.MEDIUM, ConfidenceLevel.HIGH]

class AnalysisResult(BaseModel):
    """
    Outcome of analysing a single survey submission.

    Attributes:
        primary_imbalance: Hormone with the highest positive score, if any
        secondary_imbalances: Up to two next-highest positive hormones
        confidence_level: Confidence label after cycle and lab adjustments
        explanations: Human-readable reasons in rule evaluation order
        conflicts: Lab adjustment notes (also included in explanations)
        scores: Final per-hormone scores
        total_score: Sum of all six scores
        cycle_phase: Cycle phase used while scoring
        lab_count: Number of usable lab values supplied
    """
    primary_imbalance: Optional[HormoneType] = None
    secondary_imbalances: List[HormoneType] = Field(default_factory=list)
    confidence_level: ConfidenceLevel
    explanations: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)
    scores: HormoneScores
    total_score: int = Field(..., ge=0)
    cycle_phase: CyclePhase
    lab_count: int = 0
