"""Ranking annotations for scored matches: confidence, hiring recommendation,
competition level, estimated success rate and a short written summary.

Runs after the engine and never changes a match_score.
"""

import logging
import math
from collections.abc import Sequence

from freelance_match.core.schemas import (
    AIMatchingResult,
    CompetitionLevel,
    ComplexityLevel,
    Confidence,
    FreelancerProfile,
    MatchingCriteria,
    MatchInsights,
    RankedMatch,
    Recommendation,
    SkillLevel,
)
from freelance_match.pipeline.scorer import average_category_score, average_skill_score

logger = logging.getLogger(__name__)

# Lower bounds, checked from the top band down.
_CONFIDENCE_BANDS: list[tuple[float, Confidence]] = [
    (0.8, "excellent"),
    (0.6, "high"),
    (0.4, "medium"),
]
_RECOMMENDATION_BANDS: list[tuple[float, Recommendation]] = [
    (0.8, "highly_recommend"),
    (0.6, "recommend"),
    (0.4, "consider"),
]


def confidence_level(score: float) -> Confidence:
    for bound, label in _CONFIDENCE_BANDS:
        if score >= bound:
            return label
    return "low"


def recommendation_for(score: float) -> Recommendation:
    for bound, label in _RECOMMENDATION_BANDS:
        if score >= bound:
            return label
    return "reject"


def competition_level(total: int, position: int) -> CompetitionLevel:
    """Competition faced at zero-based ``position`` among ``total`` ranked matches.

    ``total`` counts the ranked results, not every candidate that was scored.
    """
    if position <= total * 0.1:
        return "low"
    if position <= total * 0.3:
        return "medium"
    return "high"


def estimate_success_rate(
    result: AIMatchingResult,
    profile: FreelancerProfile,
    criteria: MatchingCriteria,
) -> float:
    """Heuristic probability that the engagement succeeds, clamped to 0-1."""
    rate = result.match_score * 0.7

    if profile.average_rating > 4.5:
        rate += 0.15
    elif profile.average_rating < 3.5:
        rate -= 0.1

    if average_category_score(result.category_matches) > 0.9:
        rate += 0.1

    if profile.is_verified:
        rate += 0.05

    has_expert_skill = any(s.level == SkillLevel.EXPERT for s in profile.skills)
    if criteria.complexity == ComplexityLevel.ENTERPRISE and not has_expert_skill:
        rate -= 0.15

    return max(0.0, min(1.0, rate))


def build_insights(result: AIMatchingResult) -> MatchInsights:
    strengths: list[str] = []
    if average_skill_score(result.skill_matches) > 0.8:
        strengths.append("Excellent skill match with all required technologies")
    if average_category_score(result.category_matches) > 0.8:
        strengths.append("Strong relevant experience in similar projects")

    concerns: list[str] = []
    if result.budget_match < 0.5:
        concerns.append("Budget expectations may not align with project budget")
    if result.availability_match < 0.6:
        concerns.append("Availability constraints might affect project timeline")

    if result.match_score > 0.8:
        next_step = "Highly recommended candidate - proceed with interview"
    elif result.match_score > 0.6:
        next_step = "Good candidate - review portfolio and conduct screening"
    else:
        next_step = "Consider for backup - address identified concerns first"

    return MatchInsights(
        summary=match_summary(result.match_score),
        key_strengths=strengths,
        potential_concerns=concerns,
        next_steps=[next_step],
    )


def match_summary(score: float) -> str:
    """E.g. "Excellent match with 85% compatibility. Highly recommend for this project." """
    confidence = confidence_level(score).capitalize()
    recommendation = recommendation_for(score).replace("_", " ").capitalize()
    return (
        f"{confidence} match with {math.floor(score * 100 + 0.5)}% compatibility. "
        f"{recommendation} for this project."
    )


def rank_matches(
    results: Sequence[AIMatchingResult],
    criteria: MatchingCriteria,
    profiles: Sequence[FreelancerProfile],
) -> list[RankedMatch]:
    """Annotate already-ordered engine results with rank and hiring guidance.

    Args:
        results: Output of find_matches, best first.
        criteria: The criteria the results were scored against.
        profiles: Profiles the results came from; looked up by freelancer id.

    Raises:
        KeyError: If a result refers to a profile that was not supplied.
    """
    by_id: dict[str, FreelancerProfile] = {}
    for p in profiles:
        by_id.setdefault(p.id, p)
    total = len(results)
    ranked: list[RankedMatch] = []

    for position, result in enumerate(results):
        profile = by_id[result.freelancer_id]
        ranked.append(
            RankedMatch(
                rank=position + 1,
                result=result,
                confidence=confidence_level(result.match_score),
                recommendation=recommendation_for(result.match_score),
                competition_level=competition_level(total, position),
                estimated_success_rate=estimate_success_rate(result, profile, criteria),
                insights=build_insights(result),
            )
        )

    logger.debug("Ranked %d matches", len(ranked))
    return ranked
