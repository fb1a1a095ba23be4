"""Rule-based matching engine: scores freelancer profiles against project criteria.

Score range: 0.0-1.0 (clamped). The weighted sum of five sub-scores comes from
ScoringConfig.weights; a tag-overlap boost is added on top as headroom.
Pure functions only: no I/O, no state kept between calls.
"""

import logging
from collections.abc import Sequence

from freelance_match.core.config import MatchingOptions, ScoringConfig
from freelance_match.core.schemas import (
    AIMatchingResult,
    BudgetRange,
    CategoryMatch,
    ComplexityLevel,
    FreelancerProfile,
    MatchingCriteria,
    SkillLevel,
    SkillMatch,
)

logger = logging.getLogger(__name__)

LEVEL_SCORES: dict[SkillLevel, float] = {
    SkillLevel.EXPERT: 1.0,
    SkillLevel.ADVANCED: 0.8,
    SkillLevel.INTERMEDIATE: 0.6,
    SkillLevel.BEGINNER: 0.4,
}
UNKNOWN_LEVEL_SCORE = 0.2

# Recorded on every SkillMatch; descriptive only, never gates the score.
DEFAULT_REQUIRED_LEVEL = SkillLevel.INTERMEDIATE

EXPERIENCE_CAP_YEARS = 5.0
EXPERIENCE_FACTOR = 0.3
VERIFIED_BONUS = 0.2

PORTFOLIO_CAP_ITEMS = 5.0
LISTED_CATEGORY_RELEVANCE = 1.0
UNLISTED_CATEGORY_RELEVANCE = 0.2

BASE_WEEKLY_HOURS = 20.0
COMPLEXITY_MULTIPLIERS: dict[ComplexityLevel, float] = {
    ComplexityLevel.SIMPLE: 0.5,
    ComplexityLevel.MODERATE: 1.0,
    ComplexityLevel.COMPLEX: 2.0,
}
DEFAULT_COMPLEXITY_MULTIPLIER = 3.0

# (fraction of required hours, score), checked in order.
AVAILABILITY_BANDS: list[tuple[float, float]] = [(1.0, 1.0), (0.7, 0.8), (0.5, 0.6)]
AVAILABILITY_FLOOR = 0.3
NO_TIMELINE_AVAILABILITY = 0.8

BUDGET_IN_RANGE = 1.0
BUDGET_NEAR_RANGE = 0.7
BUDGET_OUT_OF_RANGE = 0.3
BUDGET_OVER_TOLERANCE = 1.2
BUDGET_UNDER_TOLERANCE = 0.8
# Fixed-price budgets and missing budgets are not modelled.
UNMODELLED_BUDGET_SCORE = 0.8

# (max response hours, score), checked in order.
RESPONSE_TIME_BANDS: list[tuple[float, float]] = [(2.0, 1.0), (6.0, 0.8), (24.0, 0.6)]
RESPONSE_TIME_FLOOR = 0.3

RISK_SUCCESS_RATE = 0.85
RISK_RESPONSE_HOURS = 12.0
RISK_MIN_PROJECTS = 5
RISK_RATING = 4.5

STRONG_PORTFOLIO_ITEMS = 10

REASONING_SKILL_THRESHOLD = 0.5
REASONING_AVAILABILITY_THRESHOLD = 0.8
REASONING_BUDGET_THRESHOLD = 0.8
REASONING_CATEGORY_THRESHOLD = 0.7


def find_matches(
    criteria: MatchingCriteria,
    candidates: Sequence[FreelancerProfile],
    options: MatchingOptions | None = None,
    config: ScoringConfig | None = None,
) -> list[AIMatchingResult]:
    """Score all candidates and return the ranked qualifying results.

    Args:
        criteria: Project requirements.
        candidates: Freelancer profiles to score; may be empty.
        options: min_score threshold, max_results cap, semantic boost toggle.
        config: Weight table; defaults reproduce the marketplace weights.

    Returns:
        Results with match_score >= min_score, sorted by match_score desc
        (ties keep input order), at most max_results long.
    """
    options = options or MatchingOptions()
    config = config or ScoringConfig()

    scored = [
        calculate_match(criteria, c, config, use_semantic_search=options.use_semantic_search)
        for c in candidates
    ]
    qualifying = [r for r in scored if r.match_score >= options.min_score]
    qualifying.sort(key=lambda r: r.match_score, reverse=True)

    logger.debug(
        "Scored %d candidates: %d >= %.2f, returning %d",
        len(scored), len(qualifying), options.min_score,
        min(len(qualifying), options.max_results),
    )
    return qualifying[: options.max_results]


def calculate_match(
    criteria: MatchingCriteria,
    freelancer: FreelancerProfile,
    config: ScoringConfig,
    use_semantic_search: bool = True,
) -> AIMatchingResult:
    """Build the full score breakdown for a single candidate."""
    skill_matches = calculate_skill_matches(criteria.skills, freelancer)
    category_matches = calculate_category_matches(criteria.categories, freelancer)
    availability = calculate_availability_match(criteria, freelancer)
    budget = calculate_budget_match(criteria.budget, freelancer)
    timeline = calculate_timeline_match(freelancer)

    weights = config.weights
    raw_score = (
        average_skill_score(skill_matches) * weights.skills
        + average_category_score(category_matches) * weights.categories
        + availability * weights.availability
        + budget * weights.budget
        + timeline * weights.timeline
    )

    semantic_boost = 0.0
    if use_semantic_search:
        semantic_boost = calculate_semantic_similarity(criteria, freelancer)

    final_score = max(0.0, min(1.0, raw_score + semantic_boost * config.semantic_boost_weight))

    return AIMatchingResult(
        freelancer_id=freelancer.id,
        match_score=final_score,
        reasoning=generate_reasoning(skill_matches, category_matches, availability, budget),
        skill_matches=skill_matches,
        category_matches=category_matches,
        availability_match=availability,
        budget_match=budget,
        timeline_match=timeline,
        risk_factors=identify_risk_factors(freelancer),
        recommendations=generate_recommendations(criteria, freelancer, skill_matches),
    )


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------


def calculate_skill_matches(
    required_skills: Sequence[str], freelancer: FreelancerProfile
) -> list[SkillMatch]:
    return [_skill_match(skill_id, freelancer) for skill_id in required_skills]


def _skill_match(skill_id: str, freelancer: FreelancerProfile) -> SkillMatch:
    skill = next((s for s in freelancer.skills if s.skill_id == skill_id), None)
    if skill is None:
        return SkillMatch(
            skill_id=skill_id,
            freelancer_level=SkillLevel.BEGINNER,
            required_level=DEFAULT_REQUIRED_LEVEL,
            experience=0.0,
            verified=False,
            match_score=0.0,
        )

    experience_score = min(1.0, skill.experience / EXPERIENCE_CAP_YEARS)
    verified_bonus = VERIFIED_BONUS if skill.verified else 0.0
    score = min(
        1.0,
        skill_level_score(skill.level) + experience_score * EXPERIENCE_FACTOR + verified_bonus,
    )
    return SkillMatch(
        skill_id=skill_id,
        freelancer_level=skill.level,
        required_level=DEFAULT_REQUIRED_LEVEL,
        experience=skill.experience,
        verified=skill.verified,
        match_score=score,
    )


def skill_level_score(level: SkillLevel | str) -> float:
    return LEVEL_SCORES.get(level, UNKNOWN_LEVEL_SCORE)  # type: ignore[arg-type]


def calculate_category_matches(
    required_categories: Sequence[str], freelancer: FreelancerProfile
) -> list[CategoryMatch]:
    matches: list[CategoryMatch] = []
    for category_id in required_categories:
        portfolio_items = sum(1 for item in freelancer.portfolio if category_id in item.category_ids)
        relevance = (
            LISTED_CATEGORY_RELEVANCE
            if category_id in freelancer.categories
            else UNLISTED_CATEGORY_RELEVANCE
        )
        matches.append(
            CategoryMatch(
                category_id=category_id,
                relevance=relevance,
                experience=min(1.0, portfolio_items / PORTFOLIO_CAP_ITEMS),
                success_rate=freelancer.success_rate,
                portfolio_items=portfolio_items,
            )
        )
    return matches


def estimate_required_hours(criteria: MatchingCriteria) -> float:
    """Weekly hours a project needs, from its complexity (unset counts as enterprise)."""
    multiplier = COMPLEXITY_MULTIPLIERS.get(criteria.complexity, DEFAULT_COMPLEXITY_MULTIPLIER)  # type: ignore[arg-type]
    return BASE_WEEKLY_HOURS * multiplier


def calculate_availability_match(criteria: MatchingCriteria, freelancer: FreelancerProfile) -> float:
    if criteria.timeline is None:
        return NO_TIMELINE_AVAILABILITY

    required_hours = estimate_required_hours(criteria)
    available_hours = freelancer.availability.hours_per_week
    for fraction, score in AVAILABILITY_BANDS:
        if available_hours >= required_hours * fraction:
            return score
    return AVAILABILITY_FLOOR


def calculate_budget_match(budget: BudgetRange | None, freelancer: FreelancerProfile) -> float:
    """Hourly budgets are compared against the hourly rate; anything else is a flat 0.8."""
    if budget is None or budget.type != "hourly":
        return UNMODELLED_BUDGET_SCORE

    # An unset bound never satisfies a comparison.
    rate = freelancer.rates.hourly_rate
    low, high = budget.min, budget.max
    if low is not None and high is not None and low <= rate <= high:
        return BUDGET_IN_RANGE
    if high is not None and rate <= high * BUDGET_OVER_TOLERANCE:
        return BUDGET_NEAR_RANGE
    if low is not None and rate >= low * BUDGET_UNDER_TOLERANCE:
        return BUDGET_NEAR_RANGE
    return BUDGET_OUT_OF_RANGE


def calculate_timeline_match(freelancer: FreelancerProfile) -> float:
    """Responsiveness score from the freelancer's average response time in hours."""
    for max_hours, score in RESPONSE_TIME_BANDS:
        if freelancer.response_time <= max_hours:
            return score
    return RESPONSE_TIME_FLOOR


def calculate_semantic_similarity(criteria: MatchingCriteria, freelancer: FreelancerProfile) -> float:
    """Jaccard overlap of the freelancer's tags/skills/categories and the criteria ids."""
    freelancer_tags = {
        *freelancer.tags,
        *(s.skill_id for s in freelancer.skills),
        *freelancer.categories,
    }
    criteria_tags = {*criteria.skills, *criteria.categories, *criteria.tools}

    union = freelancer_tags | criteria_tags
    if not union:
        return 0.0
    return len(freelancer_tags & criteria_tags) / len(union)


def average_skill_score(skill_matches: Sequence[SkillMatch]) -> float:
    if not skill_matches:
        return 0.0
    return sum(m.match_score for m in skill_matches) / len(skill_matches)


def average_category_score(category_matches: Sequence[CategoryMatch]) -> float:
    """Mean of relevance x experience. success_rate is collected but not weighted in."""
    if not category_matches:
        return 0.0
    return sum(m.relevance * m.experience for m in category_matches) / len(category_matches)


# ---------------------------------------------------------------------------
# Explanations
# ---------------------------------------------------------------------------


def identify_risk_factors(freelancer: FreelancerProfile) -> list[str]:
    risks: list[str] = []
    if freelancer.success_rate < RISK_SUCCESS_RATE:
        risks.append("Below average success rate")
    if freelancer.response_time > RISK_RESPONSE_HOURS:
        risks.append("Slow response time")
    if freelancer.total_projects < RISK_MIN_PROJECTS:
        risks.append("Limited project history")
    if freelancer.average_rating < RISK_RATING:
        risks.append("Below average ratings")
    return risks


def generate_recommendations(
    criteria: MatchingCriteria,
    freelancer: FreelancerProfile,
    skill_matches: Sequence[SkillMatch],
) -> list[str]:
    recommendations: list[str] = []

    missing = [m.skill_id for m in skill_matches if m.match_score == 0]
    if missing:
        recommendations.append(f"Consider providing training for: {', '.join(missing)}")

    budget_max = criteria.budget.max if criteria.budget is not None else None
    if budget_max is not None and freelancer.rates.hourly_rate > budget_max:
        recommendations.append("Consider negotiating project-based pricing")

    if len(freelancer.portfolio) > STRONG_PORTFOLIO_ITEMS:
        recommendations.append("Experienced freelancer with strong portfolio")

    return recommendations


def generate_reasoning(
    skill_matches: Sequence[SkillMatch],
    category_matches: Sequence[CategoryMatch],
    availability_match: float,
    budget_match: float,
) -> str:
    """One-sentence human-readable summary of the strongest signals."""
    matched = sum(1 for m in skill_matches if m.match_score > REASONING_SKILL_THRESHOLD)
    parts = [f"Matched {matched}/{len(skill_matches)} required skills."]

    if availability_match > REASONING_AVAILABILITY_THRESHOLD:
        parts.append("Good availability alignment.")
    if budget_match > REASONING_BUDGET_THRESHOLD:
        parts.append("Budget requirements met.")

    avg_relevance = (
        sum(m.relevance for m in category_matches) / len(category_matches)
        if category_matches
        else 0.0
    )
    if avg_relevance > REASONING_CATEGORY_THRESHOLD:
        parts.append("Strong category expertise.")

    return " ".join(parts).strip()
