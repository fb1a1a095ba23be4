"""Orchestrator: wires the filter chain, matching engine and ranking.

Data flow:
  1. Filter chain → eligible profiles
  2. Engine (find_matches) → scored, thresholded, capped results
  3. Ranking → RankedMatch list with hiring guidance
"""

import json
import logging
from datetime import datetime

from freelance_match.core.config import MatchingOptions, Settings
from freelance_match.core.request import MatchRequest
from freelance_match.core.schemas import RankedMatch
from freelance_match.pipeline.filters import build_filters, run_filter_chain
from freelance_match.pipeline.insights import rank_matches
from freelance_match.pipeline.scorer import find_matches

logger = logging.getLogger(__name__)


class MatchRun:
    """Summary of a single matching run."""

    def __init__(
        self,
        candidate_count: int,
        eligible_count: int,
        matches: list[RankedMatch],
        started_at: datetime,
        finished_at: datetime,
    ) -> None:
        self.candidate_count = candidate_count
        self.eligible_count = eligible_count
        self.matches = matches
        self.started_at = started_at
        self.finished_at = finished_at

    @property
    def matched_count(self) -> int:
        return len(self.matches)


def run_matching(
    request: MatchRequest,
    settings: Settings,
    options: MatchingOptions | None = None,
) -> MatchRun:
    """Execute one matching request through the full pipeline.

    ``options`` overrides ``settings.options`` (e.g. CLI flags).
    """
    options = options or settings.options
    started_at = datetime.now()

    # Step 1: Eligibility filters
    filters = build_filters(request.criteria, settings.filters, request.exclude_profiles)
    eligible = run_filter_chain(list(request.candidates), filters)
    logger.info("Eligible candidates: %d of %d", len(eligible), len(request.candidates))

    # Step 2: Score
    results = find_matches(request.criteria, eligible, options, settings.scoring)

    # Step 3: Rank
    ranked = rank_matches(results, request.criteria, eligible)

    finished_at = datetime.now()
    logger.info(
        "Matching complete: %d candidates, %d eligible, %d matched (min_score=%.2f)",
        len(request.candidates), len(eligible), len(ranked), options.min_score,
    )

    return MatchRun(
        candidate_count=len(request.candidates),
        eligible_count=len(eligible),
        matches=ranked,
        started_at=started_at,
        finished_at=finished_at,
    )


def export_results_json(run: MatchRun) -> str:
    """Export ranked matches as a camelCase JSON string."""
    data = [m.model_dump(mode="json", by_alias=True) for m in run.matches]
    return json.dumps(data, indent=2)
