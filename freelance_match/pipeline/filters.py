"""Eligibility filter chain applied to candidate profiles before scoring.

Filter order:
  1. DeduplicationFilter        - repeated profile ids, first occurrence wins
  2. ExcludeProfilesFilter      - explicit opt-outs from the request or settings
  3. VerificationRequiredFilter - at least one verified verification
  4. RatingMinimumFilter        - average_rating floor
  5. ResponseTimeMaxFilter      - response_time ceiling (hours)

Filters never touch scores; they only shrink the candidate list.
"""

import logging
from collections.abc import Callable, Iterable

from freelance_match.core.config import FilterConfig
from freelance_match.core.schemas import FreelancerProfile, MatchingCriteria

logger = logging.getLogger(__name__)

# A filter is a callable that takes profiles and returns a subset.
Filter = Callable[[list[FreelancerProfile]], list[FreelancerProfile]]


class DeduplicationFilter:
    """Remove repeated profiles by id within one run."""

    def __call__(self, profiles: list[FreelancerProfile]) -> list[FreelancerProfile]:
        seen: set[str] = set()
        result: list[FreelancerProfile] = []
        for p in profiles:
            if p.id not in seen:
                seen.add(p.id)
                result.append(p)
        deduped = len(profiles) - len(result)
        if deduped:
            logger.debug("DeduplicationFilter: removed %d duplicates", deduped)
        return result


class ExcludeProfilesFilter:
    """Remove profiles whose id is on the exclusion list."""

    def __init__(self, profile_ids: Iterable[str]) -> None:
        self._ids = {pid.strip() for pid in profile_ids if pid.strip()}

    def __call__(self, profiles: list[FreelancerProfile]) -> list[FreelancerProfile]:
        if not self._ids:
            return profiles
        result = [p for p in profiles if p.id not in self._ids]
        excluded = len(profiles) - len(result)
        if excluded:
            logger.debug("ExcludeProfilesFilter: removed %d profiles", excluded)
        return result


class VerificationRequiredFilter:
    """Keep only verified profiles when verification is required; otherwise a no-op."""

    def __init__(self, required: bool) -> None:
        self._required = required

    def __call__(self, profiles: list[FreelancerProfile]) -> list[FreelancerProfile]:
        if not self._required:
            return profiles
        result = [p for p in profiles if p.is_verified]
        removed = len(profiles) - len(result)
        if removed:
            logger.debug("VerificationRequiredFilter: removed %d unverified profiles", removed)
        return result


class RatingMinimumFilter:
    def __init__(self, minimum: float | None) -> None:
        self._minimum = minimum

    def __call__(self, profiles: list[FreelancerProfile]) -> list[FreelancerProfile]:
        if self._minimum is None:
            return profiles
        result = [p for p in profiles if p.average_rating >= self._minimum]
        removed = len(profiles) - len(result)
        if removed:
            logger.debug(
                "RatingMinimumFilter: removed %d profiles rated below %.2f", removed, self._minimum
            )
        return result


class ResponseTimeMaxFilter:
    def __init__(self, max_hours: float | None) -> None:
        self._max_hours = max_hours

    def __call__(self, profiles: list[FreelancerProfile]) -> list[FreelancerProfile]:
        if self._max_hours is None:
            return profiles
        result = [p for p in profiles if p.response_time <= self._max_hours]
        removed = len(profiles) - len(result)
        if removed:
            logger.debug(
                "ResponseTimeMaxFilter: removed %d profiles slower than %.1fh",
                removed, self._max_hours,
            )
        return result


def build_filters(
    criteria: MatchingCriteria,
    config: FilterConfig,
    exclude_profiles: Iterable[str] = (),
) -> list[Filter]:
    """Build the filter chain for one request.

    Request exclusions are merged with the configured ones; verification is
    required if either the criteria or the settings ask for it.
    """
    filters: list[Filter] = []
    if config.drop_duplicates:
        filters.append(DeduplicationFilter())
    filters.extend([
        ExcludeProfilesFilter([*config.exclude_profiles, *exclude_profiles]),
        VerificationRequiredFilter(criteria.verification_required or config.require_verification),
        RatingMinimumFilter(criteria.rating_minimum),
        ResponseTimeMaxFilter(criteria.response_time_max),
    ])
    return filters


def run_filter_chain(
    profiles: list[FreelancerProfile],
    filters: list[Filter],
) -> list[FreelancerProfile]:
    """Apply filters in order, returning the surviving profiles."""
    result = profiles
    for f in filters:
        result = f(result)
    return result
