"""
Cycle phase model used to contextualise symptom interpretation.
"""
from enum import Enum

class CyclePhase(str, Enum):
    """
    Categorical position within the menstrual cycle.

    UNKNOWN is used whenever cycle data is missing or the cycle is irregular.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"
    UNKNOWN = "unknown"

    @property
    def is_known(self) -> bool:
        return self != CyclePhase.UNKNOWN
