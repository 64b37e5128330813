"""
Recommendation models for research-backed lifestyle suggestions.
"""
from enum import Enum
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from hormone_match.models.profile import UserProfile
from hormone_match.models.research import ResearchStudy

class RecommendationCategory(str, Enum):
    """
    Recommendation categories; each maps to one study intervention type.
    """
    FOOD = "food"
    MOVEMENT = "movement"
    MINDFULNESS = "mindfulness"

class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

class Intensity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

class ResearchBacking(BaseModel):
    """
    Evidence attached to a recommendation.
    """
    summary: str
    studies: List[ResearchStudy] = Field(default_factory=list, max_length=3)

class Recommendation(BaseModel):
    """
    Represents a single ranked recommendation for one category.
    """
    id: str
    category: RecommendationCategory
    title: str
    specific_action: str
    research_backing: ResearchBacking
    expected_timeline: str
    contraindications: List[str] = Field(default_factory=list)
    frequency: str
    duration: Optional[str] = None
    intensity: Optional[Intensity] = None
    priority: Priority
    relevance_score: float = Field(..., ge=0)

class RecommendationResult(BaseModel):
    """
    Recommendations for every category plus the profile they were built for.
    """
    food: List[Recommendation] = Field(default_factory=list)
    movement: List[Recommendation] = Field(default_factory=list)
    mindfulness: List[Recommendation] = Field(default_factory=list)
    user_profile: UserProfile
    generated_at: datetime

    def for_category(self, category: RecommendationCategory) -> List[Recommendation]:
        return getattr(self, RecommendationCategory(category).value)
