"""
Survey response models for the hormone health intake questionnaire.

Enum values mirror the answer options shown to the user so that raw intake
payloads validate directly into these models.
"""
from enum import Enum
from datetime import date
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

class PeriodRegularity(str, Enum):
    """Q1: Is your period regular?"""
    YES = "Yes"
    NO = "No"
    NO_PERIOD = "No period"

class FlowType(str, Enum):
    """Q3: How would you describe your flow?"""
    NORMAL = "Normal"
    HEAVY = "Heavy"
    LIGHT = "Light"
    PAINFUL = "Painful"

class EnergyPattern(str, Enum):
    """Q5: How is your energy through the day?"""
    STEADY = "Steady energy"
    MORNING_FATIGUE = "Morning fatigue"
    AFTERNOON_CRASH = "Afternoon crash"
    CONSTANT_FATIGUE = "Constant fatigue"

class MoodPattern(str, Enum):
    """Q6: Mood changes before or during your period."""
    NO_CHANGE = "No change"
    IRRITABLE = "Irritable"
    SAD = "Sad/depressed"
    RAGE = "Rage/anger"

class StressLevel(str, Enum):
    """Q8: Typical stress level."""
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"

class BirthControlStatus(str, Enum):
    """Q9: Hormonal birth control use."""
    NO = "No"
    CURRENTLY_USING = "Currently using"
    RECENTLY_STOPPED = "Recently stopped"

LabInput = Optional[Union[float, str]]

class LabValues(BaseModel):
    """
    Optional lab results as entered by the user.

    Values stay raw here; parsing happens in the lab service so that
    unparseable input is skipped instead of rejected.
    """
    free_t: LabInput = None
    dhea: LabInput = None
    lh: LabInput = None
    fsh: LabInput = None
    tsh: LabInput = None
    t3: LabInput = None
    insulin: LabInput = None
    hba1c: LabInput = None

class SurveyResponses(BaseModel):
    """
    A submitted questionnaire. Immutable once created.
    """
    model_config = ConfigDict(frozen=True)

    period: Optional[PeriodRegularity] = None
    cycle_length: Optional[int] = None
    last_period: Optional[date] = None
    dont_remember: bool = False
    flow: Optional[FlowType] = None
    symptoms: List[str] = Field(default_factory=list)
    energy: Optional[EnergyPattern] = None
    mood: Optional[MoodPattern] = None
    cravings: List[str] = Field(default_factory=list)
    stress: Optional[StressLevel] = None
    birth_control: Optional[BirthControlStatus] = None
    conditions: List[str] = Field(default_factory=list)
    labs: Optional[LabValues] = None
    age: Optional[int] = Field(None, ge=0)
    ethnicity: Optional[str] = None

    @field_validator(
        "period", "cycle_length", "last_period", "flow", "energy",
        "mood", "stress", "birth_control", mode="before"
    )
    @classmethod
    def blank_as_missing(cls, value):
        """Unanswered questions arrive as empty strings from the intake form."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("symptoms", "cravings", "conditions", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value
