"""
Research corpus loading and study quality scoring.

The corpus is a static JSON file validated once at load time and held as an
immutable tuple. Quality scoring depends only on the study itself.

Typical usage:
    >>> corpus = get_research_corpus()
    >>> calculate_quality_score(corpus[0], current_year=2024)
    17
"""
import os
import json
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from hormone_match.models.research import InterventionType, ResearchStudy
from hormone_match.services.constants import (
    CITATION_POINTS,
    MAX_RISK_BIAS,
    PARTICIPANT_POINTS,
    RECENCY_POINTS,
    STUDY_TYPE_POINTS,
)
from hormone_match.services.exceptions import CorpusError, CorpusValidationError
from hormone_match.utils.logging import log_exception, logger

ResearchCorpus = Tuple[ResearchStudy, ...]

DEFAULT_CORPUS_PATH = Path(__file__).resolve().parent.parent / "data" / "research_studies.json"

# Shared instance, loaded lazily
_corpus_instance: Optional[ResearchCorpus] = None

def build_research_corpus(records: Iterable[dict]) -> ResearchCorpus:
    """
    Validate raw study records into an immutable corpus.

    Args:
        records: Study dictionaries as stored in the corpus file

    Returns:
        Tuple of validated studies in file order

    Raises:
        CorpusValidationError: If a record violates the study schema or an id repeats
    """
    studies: List[ResearchStudy] = []
    seen_ids = set()
    for index, record in enumerate(records):
        try:
            study = ResearchStudy.model_validate(record)
        except ValidationError as e:
            study_id = record.get("id") if isinstance(record, dict) else None
            raise CorpusValidationError(
                f"Invalid research study at index {index} ({study_id}): {e}"
            ) from e
        if study.id in seen_ids:
            raise CorpusValidationError(f"Duplicate research study id: {study.id}")
        seen_ids.add(study.id)
        studies.append(study)
    return tuple(studies)

def load_research_corpus(path: Optional[Union[str, Path]] = None) -> ResearchCorpus:
    """
    Load and validate the research corpus file.

    Args:
        path: Corpus JSON path; defaults to RESEARCH_CORPUS_PATH or the bundled file

    Returns:
        Tuple of validated studies

    Raises:
        CorpusError: If the file is missing or is not valid JSON
        CorpusValidationError: If any study fails validation
    """
    if path is None:
        path = os.environ.get("RESEARCH_CORPUS_PATH") or DEFAULT_CORPUS_PATH
    path = Path(path)

    if not path.exists():
        logger.error(f"Research corpus not found: {path}")
        raise CorpusError(f"Research corpus not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        log_exception(logger, "Research corpus is not valid JSON", extra={"path": str(path)})
        raise CorpusError(f"Research corpus is not valid JSON: {path}") from e

    if not isinstance(records, list):
        raise CorpusValidationError(f"Research corpus must be a list of studies: {path}")

    try:
        corpus = build_research_corpus(records)
    except CorpusValidationError:
        log_exception(logger, "Research corpus failed validation", extra={"path": str(path)})
        raise

    logger.info("Research corpus loaded", extra={
        "path": str(path),
        "studies": len(corpus),
        "by_type": {
            t.value: sum(1 for s in corpus if s.intervention_type == t)
            for t in InterventionType
        }
    })
    return corpus

def get_research_corpus() -> ResearchCorpus:
    """
    Get or load the process-wide research corpus.

    The corpus is read once on first use and shared afterwards. Pass a corpus
    explicitly to RecommendationEngine to avoid this shared state.
    """
    global _corpus_instance
    if _corpus_instance is None:
        _corpus_instance = load_research_corpus()
    return _corpus_instance

def reference_year() -> int:
    """Year used for recency scoring: RESEARCH_REFERENCE_YEAR or the current year."""
    configured = os.environ.get("RESEARCH_REFERENCE_YEAR")
    if configured:
        try:
            return int(configured)
        except ValueError:
            logger.warning("Ignoring invalid RESEARCH_REFERENCE_YEAR", extra={"value": configured})
    return date.today().year

def _tier_points(value: int, tiers: List[Tuple[int, int]], at_most: bool = False) -> int:
    for bound, points in tiers:
        if (value <= bound) if at_most else (value >= bound):
            return points
    return 0

def calculate_quality_score(study: ResearchStudy, current_year: Optional[int] = None) -> int:
    """
    Score a study's intrinsic credibility.

    Recency, study type, risk of bias, citations and sample size each add
    points; the user plays no part.

    Args:
        study: Study to score
        current_year: Reference year for recency, defaults to reference_year()

    Returns:
        Integer quality score
    """
    if current_year is None:
        current_year = reference_year()

    score = _tier_points(current_year - study.publication_year, RECENCY_POINTS, at_most=True)
    score += STUDY_TYPE_POINTS[study.study_type]
    score += MAX_RISK_BIAS - study.risk_bias_score
    score += _tier_points(study.citation_count, CITATION_POINTS)
    score += _tier_points(study.participant_count, PARTICIPANT_POINTS)
    return score
