"""
Research study models for the static evidence corpus.

Each relevance map is keyed by a closed enum so that lookups from a user
profile either hit a known key or contribute nothing.
"""
from enum import Enum
from typing import Annotated, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from hormone_match.models.cycle import CyclePhase
from hormone_match.models.hormone import HormoneType

class StudyType(str, Enum):
    HUMAN = "human"
    ANIMAL = "animal"
    REVIEW = "review"

class InterventionType(str, Enum):
    FOOD = "food"
    MOVEMENT = "movement"
    MINDFULNESS = "mindfulness"
    COMBINED = "combined"

class ParticipantGender(str, Enum):
    FEMALE = "female"
    MALE = "male"
    MIXED = "mixed"

class ConditionKey(str, Enum):
    PCOS = "pcos"
    PMDD = "pmdd"
    ENDOMETRIOSIS = "endometriosis"
    HYPOTHYROIDISM = "hypothyroidism"
    HYPERTHYROIDISM = "hyperthyroidism"

class SymptomKey(str, Enum):
    ACNE = "acne"
    HAIR_LOSS = "hairloss"
    BLOATING = "bloating"
    BREAST_TENDERNESS = "breasttenderness"
    FATIGUE = "fatigue"
    MOOD_CHANGES = "moodchanges"
    WEIGHT_GAIN = "weightgain"
    IRREGULAR_PERIODS = "irregularperiods"

class BirthControlKey(str, Enum):
    ON_OCP = "onocp"
    OFF_OCP = "offocp"
    IUD = "iud"
    NONE = "none"

class CravingKey(str, Enum):
    SUGAR = "sugar"
    SALT = "salt"
    CHOCOLATE = "chocolate"
    NONE = "none"

Weight = Annotated[float, Field(ge=0, le=10)]

class AgeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "AgeRange":
        if self.min > self.max:
            raise ValueError(f"Age range minimum {self.min} exceeds maximum {self.max}")
        return self

class ResearchStudy(BaseModel):
    """
    A single entry in the research corpus.

    Attributes:
        risk_bias_score: Risk of bias from 1 (best) to 10 (worst)
        intervention_type: Which recommendation category the study backs
        hormone_relevance .. cravings_relevance: 0-10 weights per lookup key
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    authors: List[str] = Field(default_factory=list)
    publication_year: int
    journal: str
    doi: Optional[str] = None
    pubmed_id: Optional[str] = None
    citation_count: int = Field(0, ge=0)
    study_type: StudyType
    participant_count: int = Field(0, ge=0)
    participant_gender: ParticipantGender = ParticipantGender.FEMALE
    age_range: Optional[AgeRange] = None
    risk_bias_score: int = Field(..., ge=1, le=10)
    intervention_type: InterventionType
    specific_intervention: str
    outcomes: List[str] = Field(default_factory=list)
    results: str
    limitations: Optional[List[str]] = None

    hormone_relevance: Dict[HormoneType, Weight] = Field(default_factory=dict)
    condition_relevance: Dict[ConditionKey, Weight] = Field(default_factory=dict)
    symptom_relevance: Dict[SymptomKey, Weight] = Field(default_factory=dict)
    cycle_phase_relevance: Dict[CyclePhase, Weight] = Field(default_factory=dict)
    birth_control_relevance: Dict[BirthControlKey, Weight] = Field(default_factory=dict)
    cravings_relevance: Dict[CravingKey, Weight] = Field(default_factory=dict)
