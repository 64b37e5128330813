"""
Lab value service.

Parses optional lab results, adjusts symptom scores with fixed threshold
rules and records conflicts between symptom and lab evidence.

Typical usage:
    >>> labs = parse_lab_values(survey.labs)
    >>> adjusted, conflicts = adjust_scores_with_labs(scores, labs)
"""
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from aws_lambda_powertools import Logger

from hormone_match.models.hormone import HormoneScores, HormoneType
from hormone_match.models.survey import LabValues

logger = Logger()

LAB_FIELDS = ("free_t", "dhea", "lh", "fsh", "tsh", "t3", "insulin", "hba1c")

LH_FSH_RATIO_THRESHOLD = 2.5
LOW_FREE_T_THRESHOLD = 1.0
LAB_ADJUSTMENT_POINTS = 2

NumericLabs = Dict[str, float]

def parse_lab_value(raw) -> Optional[float]:
    """
    Parse a single lab entry.

    Returns None for blank, unparseable or non-finite input.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Skipping unparseable lab value", extra={"value": str(raw)})
        return None
    if not math.isfinite(value):
        logger.warning("Skipping non-finite lab value", extra={"value": str(raw)})
        return None
    return value

def parse_lab_values(labs: Optional[LabValues]) -> NumericLabs:
    """
    Convert raw lab input into a sparse mapping of floats.

    Args:
        labs: Raw lab values, or None when the user supplied none

    Returns:
        Mapping of lab field name to value, containing only usable entries
    """
    if labs is None:
        return {}
    parsed: NumericLabs = {}
    for name in LAB_FIELDS:
        value = parse_lab_value(getattr(labs, name))
        if value is not None:
            parsed[name] = value
    return parsed

def _fmt(value: float) -> str:
    """Render a lab value the way it was most likely entered."""
    return str(int(value)) if value.is_integer() else str(value)

@dataclass(frozen=True)
class LabThresholdRule:
    """
    Adds points to one hormone when a single lab crosses a threshold.

    Attributes:
        lab: Lab field name
        label: Display name used in the conflict text
        hormone: Hormone axis receiving the points
        threshold: Cut-off value
        unit: Unit shown after the threshold
        above: True when values above the threshold trigger, False for below
    """
    lab: str
    label: str
    hormone: HormoneType
    threshold: float
    unit: str
    above: bool = True

    def triggered(self, value: float) -> bool:
        return value > self.threshold if self.above else value < self.threshold

    def describe(self, value: float) -> str:
        sign = ">" if self.above else "<"
        return (
            f"{self.label} {_fmt(value)} {sign} {self.threshold}{self.unit} - "
            f"added +{LAB_ADJUSTMENT_POINTS} to {self.hormone.value.capitalize()}"
        )

# Evaluated after the LH:FSH ratio and free testosterone checks
LAB_THRESHOLD_RULES: Tuple[LabThresholdRule, ...] = (
    LabThresholdRule("dhea", "DHEA", HormoneType.ANDROGENS, 300, " µg/dL"),
    LabThresholdRule("tsh", "TSH", HormoneType.THYROID, 2.5, " µIU/mL"),
    LabThresholdRule("t3", "T3", HormoneType.THYROID, 100, " ng/dL", above=False),
    LabThresholdRule("insulin", "Fasting Insulin", HormoneType.INSULIN, 6, " µIU/mL"),
    LabThresholdRule("hba1c", "HbA1c", HormoneType.INSULIN, 5.4, "%"),
)

FREE_T_RULE = LabThresholdRule("free_t", "Free Testosterone", HormoneType.ANDROGENS, 2.0, " pg/mL")

def adjust_scores_with_labs(
    symptom_scores: HormoneScores,
    labs: NumericLabs
) -> Tuple[HormoneScores, List[str]]:
    """
    Adjust symptom-based scores using lab data.

    Every triggered threshold adds a fixed +2 to one hormone and records a
    conflict string with the value and threshold embedded. Low free
    testosterone alongside androgen symptoms is recorded without any score
    change.

    Args:
        symptom_scores: Scores from symptom scoring, left unmodified
        labs: Parsed lab values

    Returns:
        Tuple of (adjusted scores, conflict strings)
    """
    adjusted = symptom_scores.model_copy()
    conflicts: List[str] = []

    lh = labs.get("lh")
    fsh = labs.get("fsh")
    if lh is not None and fsh is not None and fsh > 0:
        ratio = lh / fsh
        if ratio > LH_FSH_RATIO_THRESHOLD:
            adjusted.add(HormoneType.ANDROGENS, LAB_ADJUSTMENT_POINTS)
            conflicts.append(
                f"LH:FSH ratio of {ratio:.1f} > {LH_FSH_RATIO_THRESHOLD} suggests PCOS - "
                f"added +{LAB_ADJUSTMENT_POINTS} to Androgens"
            )

    free_t = labs.get("free_t")
    if free_t is not None:
        if FREE_T_RULE.triggered(free_t):
            adjusted.add(FREE_T_RULE.hormone, LAB_ADJUSTMENT_POINTS)
            conflicts.append(FREE_T_RULE.describe(free_t))
        elif free_t < LOW_FREE_T_THRESHOLD and symptom_scores.androgens > 0:
            conflicts.append(
                f"Androgen symptoms with low labs - Free T < {LOW_FREE_T_THRESHOLD} pg/mL"
            )

    for rule in LAB_THRESHOLD_RULES:
        value = labs.get(rule.lab)
        if value is not None and rule.triggered(value):
            adjusted.add(rule.hormone, LAB_ADJUSTMENT_POINTS)
            conflicts.append(rule.describe(value))

    adjusted.clamp()

    if conflicts:
        logger.info("Lab values adjusted scores", extra={
            "labs": sorted(labs),
            "conflicts": len(conflicts)
        })

    return adjusted, conflicts

@dataclass(frozen=True)
class LabNote:
    lab: str
    applies: Callable[[NumericLabs], bool]
    note: str

def _above(lab: str, threshold: float) -> Callable[[NumericLabs], bool]:
    return lambda labs: lab in labs and labs[lab] > threshold

def _ovarian_reserve(labs: NumericLabs) -> bool:
    return "lh" in labs and "fsh" in labs and labs["lh"] > 10 and labs["fsh"] > 10

def _pcos_ratio(labs: NumericLabs) -> bool:
    if "lh" not in labs or "fsh" not in labs or labs["fsh"] <= 0:
        return False
    return not _ovarian_reserve(labs) and labs["lh"] / labs["fsh"] > 2

# Reference-range interpretation; explanations only, never points
LAB_INTERPRETATION_NOTES: Tuple[LabNote, ...] = (
    LabNote("free_t", _above("free_t", 2.1), "Elevated free testosterone suggests androgen excess"),
    LabNote("dhea", _above("dhea", 350), "High DHEA can indicate adrenal stress or PCOS"),
    LabNote("lh", _ovarian_reserve, "Elevated LH and FSH suggest diminished ovarian reserve"),
    LabNote("lh", _pcos_ratio, "LH/FSH ratio >2 suggests PCOS"),
    LabNote("tsh", _above("tsh", 4.5), "Elevated TSH suggests hypothyroidism"),
    LabNote("insulin", _above("insulin", 25), "High insulin suggests insulin resistance"),
    LabNote("hba1c", _above("hba1c", 5.7), "Elevated HbA1c suggests blood sugar dysregulation"),
)

def interpret_lab_values(labs: NumericLabs) -> List[str]:
    """
    Produce clinical-interpretation notes for lab values outside reference ranges.
    """
    return [note.note for note in LAB_INTERPRETATION_NOTES if note.applies(labs)]
