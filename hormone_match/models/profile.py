"""
User profile model used as the lookup side of research matching.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from hormone_match.models.analysis import ConfidenceLevel
from hormone_match.models.cycle import CyclePhase
from hormone_match.models.hormone import HormoneScores, HormoneType

class UserProfile(BaseModel):
    """
    Projection of an analysis result plus raw survey context.

    Never stored on its own; it is rebuilt from the survey and analysis
    whenever recommendations are requested.
    """
    hormone_scores: HormoneScores = Field(default_factory=HormoneScores)
    primary_imbalance: Optional[HormoneType] = None
    secondary_imbalances: List[HormoneType] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    symptoms: List[str] = Field(default_factory=list)
    cycle_phase: CyclePhase = CyclePhase.UNKNOWN
    birth_control_status: str = "No"
    cravings: List[str] = Field(default_factory=list)
    age: Optional[int] = None
    ethnicity: Optional[str] = None
    confidence: ConfidenceLevel = ConfidenceLevel.LOW
