"""
Hormone axis definitions and per-axis score container.
"""
from enum import Enum
from typing import Dict, List, Tuple
from pydantic import BaseModel, Field

class HormoneType(str, Enum):
    """
    The six tracked hormone axes, in their fixed evaluation order.
    """
    ANDROGENS = "androgens"
    PROGESTERONE = "progesterone"
    ESTROGEN = "estrogen"
    THYROID = "thyroid"
    CORTISOL = "cortisol"
    INSULIN = "insulin"

class HormoneScores(BaseModel):
    """
    Integer score per hormone axis. Scores only grow through rules and are
    clamped at zero after lab adjustment.
    """
    androgens: int = Field(0, ge=0)
    progesterone: int = Field(0, ge=0)
    estrogen: int = Field(0, ge=0)
    thyroid: int = Field(0, ge=0)
    cortisol: int = Field(0, ge=0)
    insulin: int = Field(0, ge=0)

    def get(self, hormone: HormoneType) -> int:
        return getattr(self, HormoneType(hormone).value)

    def add(self, hormone: HormoneType, points: int) -> None:
        """Add points to a single hormone axis in place."""
        key = HormoneType(hormone).value
        setattr(self, key, getattr(self, key) + points)

    def clamp(self) -> None:
        """Force every axis to a minimum of zero."""
        for hormone in HormoneType:
            if self.get(hormone) < 0:
                setattr(self, hormone.value, 0)

    @property
    def total(self) -> int:
        return sum(self.get(hormone) for hormone in HormoneType)

    def as_dict(self) -> Dict[HormoneType, int]:
        return {hormone: self.get(hormone) for hormone in HormoneType}

    def ranked(self) -> List[Tuple[HormoneType, int]]:
        """
        Positive scores sorted from highest to lowest.

        Ties keep the fixed hormone order since the sort is stable.
        """
        positive = [(h, score) for h, score in self.as_dict().items() if score > 0]
        return sorted(positive, key=lambda item: item[1], reverse=True)
