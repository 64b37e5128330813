"""
Service module for matching research studies and ranking recommendations.

Typical usage:
    profile = create_user_profile(survey, analysis)
    engine = RecommendationEngine(get_research_corpus())
    food = engine.rank(profile, RecommendationCategory.FOOD)
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from aws_lambda_powertools import Logger

from hormone_match.models.analysis import AnalysisResult
from hormone_match.models.profile import UserProfile
from hormone_match.models.recommendation import (
    Priority,
    Recommendation,
    RecommendationCategory,
    RecommendationResult,
    ResearchBacking,
)
from hormone_match.models.research import ResearchStudy
from hormone_match.models.survey import BirthControlStatus, SurveyResponses
from hormone_match.services.constants import (
    CATEGORY_DEFAULTS,
    FALLBACK_ACTIONS,
    FALLBACK_FREQUENCY,
    FALLBACK_RELEVANCE_SCORE,
    FALLBACK_SUMMARY,
    FALLBACK_TIMELINE,
    HIGH_PRIORITY_RELEVANCE,
    MAX_RECOMMENDATIONS_PER_CATEGORY,
    MEDIUM_PRIORITY_RELEVANCE,
    MIN_TOTAL_SCORE,
    QUALITY_SHARE,
    RELEVANCE_SHARE,
    TITLE_WORDS,
)
from hormone_match.services.relevance import calculate_relevance_score
from hormone_match.services.research import (
    ResearchCorpus,
    calculate_quality_score,
    get_research_corpus,
)

logger = Logger()

@dataclass(frozen=True)
class StudyMatch:
    """
    A study scored against a profile.

    Attributes:
        study: Matched research study
        relevance_score: Profile-specific relevance
        quality_score: Intrinsic study quality
        total_score: 70/30 blend of relevance and quality
    """
    study: ResearchStudy
    relevance_score: float
    quality_score: int
    total_score: float

def combine_scores(relevance_score: float, quality_score: float) -> float:
    return relevance_score * RELEVANCE_SHARE + quality_score * QUALITY_SHARE

def determine_priority(relevance_score: float) -> Priority:
    """Map a relevance score onto a recommendation priority."""
    if relevance_score >= HIGH_PRIORITY_RELEVANCE:
        return Priority.HIGH
    elif relevance_score >= MEDIUM_PRIORITY_RELEVANCE:
        return Priority.MEDIUM
    return Priority.LOW

def summarize_study(study: ResearchStudy) -> str:
    return (
        f"Based on {study.publication_year} study with "
        f"{study.participant_count} women showing {study.results}"
    )

class RecommendationEngine:
    """Engine for ranking research-backed recommendations for a user profile."""

    def __init__(
        self,
        corpus: ResearchCorpus,
        current_year: Optional[int] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        """
        Initialize the engine.

        Args:
            corpus: Validated research studies, treated as read-only
            current_year: Reference year for study recency
            clock: Source of the generation timestamp
        """
        self.corpus = tuple(corpus)
        self.current_year = current_year
        self.clock = clock

    def find_matching_studies(
        self,
        profile: UserProfile,
        category: RecommendationCategory
    ) -> List[StudyMatch]:
        """
        Score every study of the category and keep those above the cutoff.

        Args:
            profile: User profile to match
            category: Recommendation category

        Returns:
            Matches sorted by total score, highest first; ties keep corpus order
        """
        category = RecommendationCategory(category)
        matches = []
        for study in self.corpus:
            if study.intervention_type.value != category.value:
                continue
            relevance = calculate_relevance_score(profile, study)
            quality = calculate_quality_score(study, self.current_year)
            total = combine_scores(relevance, quality)
            logger.debug("Scored study", extra={
                "study_id": study.id,
                "category": category.value,
                "relevance": relevance,
                "quality": quality,
                "total": total
            })
            if total > MIN_TOTAL_SCORE:
                matches.append(StudyMatch(study, relevance, quality, total))

        return sorted(matches, key=lambda match: match.total_score, reverse=True)

    def rank(
        self,
        profile: UserProfile,
        category: RecommendationCategory
    ) -> List[Recommendation]:
        """
        Ranked recommendations for one category.

        Args:
            profile: User profile to match
            category: Recommendation category

        Returns:
            One to three recommendations; a single fallback when nothing matches
        """
        category = RecommendationCategory(category)
        matches = self.find_matching_studies(profile, category)

        if not matches:
            logger.warning("No matching studies, using fallback", extra={
                "category": category.value,
                "primary_imbalance": profile.primary_imbalance
            })
            return [self._build_fallback_recommendation(category)]

        top_matches = matches[:MAX_RECOMMENDATIONS_PER_CATEGORY]
        logger.info("Ranked recommendations", extra={
            "category": category.value,
            "candidates": len(matches),
            "selected": [match.study.id for match in top_matches]
        })
        return [
            self._build_recommendation(match.study, category, match.relevance_score)
            for match in top_matches
        ]

    def generate_recommendations(self, profile: UserProfile) -> RecommendationResult:
        """
        Rank recommendations for every category.

        Args:
            profile: User profile to match

        Returns:
            RecommendationResult with food, movement and mindfulness lists
        """
        ranked = {
            category.value: self.rank(profile, category)
            for category in RecommendationCategory
        }
        return RecommendationResult(
            **ranked,
            user_profile=profile,
            generated_at=self.clock()
        )

    def _build_recommendation(
        self,
        study: ResearchStudy,
        category: RecommendationCategory,
        relevance_score: float
    ) -> Recommendation:
        """Turn a matched study into a recommendation with category defaults."""
        defaults = CATEGORY_DEFAULTS[category]
        title_words = study.specific_intervention.split(" ")[:TITLE_WORDS]

        return Recommendation(
            id=f"rec_{study.id}",
            category=category,
            title=f"{' '.join(title_words)}...",
            specific_action=study.specific_intervention,
            research_backing=ResearchBacking(
                summary=summarize_study(study),
                studies=[study]
            ),
            expected_timeline=defaults["expected_timeline"],
            contraindications=[],
            frequency=defaults["frequency"],
            duration=defaults["duration"],
            intensity=defaults["intensity"],
            priority=determine_priority(relevance_score),
            relevance_score=relevance_score
        )

    def _build_fallback_recommendation(self, category: RecommendationCategory) -> Recommendation:
        """Generic recommendation used when no study clears the cutoff."""
        return Recommendation(
            id=f"fallback_{category.value}",
            category=category,
            title=f"General {category.value} recommendation",
            specific_action=FALLBACK_ACTIONS[category],
            research_backing=ResearchBacking(summary=FALLBACK_SUMMARY, studies=[]),
            expected_timeline=FALLBACK_TIMELINE,
            frequency=FALLBACK_FREQUENCY,
            priority=Priority.MEDIUM,
            relevance_score=FALLBACK_RELEVANCE_SCORE
        )

def rank(
    profile: UserProfile,
    category: RecommendationCategory,
    corpus: Optional[ResearchCorpus] = None
) -> List[Recommendation]:
    """
    Rank recommendations for one category.

    Uses the process-wide corpus unless one is given.
    """
    if corpus is None:
        corpus = get_research_corpus()
    return RecommendationEngine(corpus).rank(profile, category)

def create_user_profile(survey: SurveyResponses, analysis: AnalysisResult) -> UserProfile:
    """
    Build the matching profile from a survey and its analysis.

    Args:
        survey: Submitted questionnaire
        analysis: Result of analysing that questionnaire

    Returns:
        UserProfile used as lookup keys into study relevance maps
    """
    birth_control = survey.birth_control or BirthControlStatus.NO
    return UserProfile(
        hormone_scores=analysis.scores.model_copy(),
        primary_imbalance=analysis.primary_imbalance,
        secondary_imbalances=list(analysis.secondary_imbalances),
        conditions=list(survey.conditions),
        symptoms=list(survey.symptoms),
        cycle_phase=analysis.cycle_phase,
        birth_control_status=birth_control.value,
        cravings=list(survey.cravings),
        age=survey.age,
        ethnicity=survey.ethnicity,
        confidence=analysis.confidence_level
    )
