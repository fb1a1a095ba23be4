"""Integration test: full matching pipeline and CLI (no network, no persistence)."""

import json
from pathlib import Path

import pytest

from freelance_match.core.config import FilterConfig, MatchingOptions, Settings
from freelance_match.core.request import MatchRequest
from freelance_match.core.schemas import (
    Availability,
    BudgetRange,
    ComplexityLevel,
    FreelancerProfile,
    FreelancerSkill,
    MatchingCriteria,
    PortfolioItem,
    RateStructure,
    SkillLevel,
)
from freelance_match.pipeline.orchestrator import MatchRun, export_results_json, run_matching
from main import main

_EXAMPLE_REQUEST = Path(__file__).resolve().parents[2] / "config" / "example_request.yaml"
_EXAMPLE_SETTINGS = Path(__file__).resolve().parents[2] / "config" / "settings.yaml"


def _profile(
    *,
    id: str,
    level: SkillLevel = SkillLevel.EXPERT,
    hourly_rate: float = 50.0,
    average_rating: float = 4.8,
) -> FreelancerProfile:
    return FreelancerProfile(
        id=id,
        categories=["web"],
        skills=[FreelancerSkill(skill_id="python", level=level, experience=5, verified=True)],
        portfolio=[PortfolioItem(id=f"{id}-{i}", category_ids=["web"]) for i in range(5)],
        availability=Availability(hours_per_week=40),
        rates=RateStructure(hourly_rate=hourly_rate),
        success_rate=0.95,
        response_time=1,
        total_projects=30,
        average_rating=average_rating,
    )


def _request(candidates: list[FreelancerProfile], **criteria: object) -> MatchRequest:
    defaults: dict[str, object] = {
        "skills": ["python"],
        "categories": ["web"],
        "budget": BudgetRange(min=40, max=60, type="hourly"),
        "complexity": ComplexityLevel.MODERATE,
    }
    defaults.update(criteria)
    return MatchRequest(criteria=MatchingCriteria(**defaults), candidates=candidates)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class TestRunMatching:
    def test_full_pipeline(self) -> None:
        request = _request([
            _profile(id="expert"),
            _profile(id="beginner", level=SkillLevel.BEGINNER, hourly_rate=150),
            _profile(id="expert"),
        ])

        run = run_matching(request, Settings())

        assert isinstance(run, MatchRun)
        assert run.candidate_count == 3
        assert run.eligible_count == 2
        assert run.matched_count == 2
        assert [m.result.freelancer_id for m in run.matches] == ["expert", "beginner"]
        assert [m.rank for m in run.matches] == [1, 2]
        assert run.matches[0].result.match_score == 1.0
        assert run.matches[0].recommendation == "highly_recommend"
        assert run.started_at <= run.finished_at

    def test_criteria_filters_applied_before_scoring(self) -> None:
        request = _request(
            [_profile(id="a"), _profile(id="b", average_rating=3.9)],
            rating_minimum=4.0,
        )
        run = run_matching(request, Settings())
        assert run.eligible_count == 1
        assert [m.result.freelancer_id for m in run.matches] == ["a"]

    def test_request_and_config_exclusions_merge(self) -> None:
        request = _request([_profile(id="a"), _profile(id="b"), _profile(id="c")])
        request = request.model_copy(update={"exclude_profiles": ["a"]})
        settings = Settings(filters=FilterConfig(exclude_profiles=["b"]))
        run = run_matching(request, settings)
        assert [m.result.freelancer_id for m in run.matches] == ["c"]

    def test_options_override(self) -> None:
        request = _request([_profile(id="a"), _profile(id="b")])
        run = run_matching(request, Settings(), MatchingOptions(max_results=1))
        assert run.matched_count == 1

    def test_no_candidates(self) -> None:
        run = run_matching(_request([]), Settings())
        assert run.matches == []
        assert export_results_json(run) == "[]"

    def test_export_json_uses_camel_case(self) -> None:
        run = run_matching(_request([_profile(id="a")]), Settings())
        data = json.loads(export_results_json(run))
        assert data[0]["rank"] == 1
        assert data[0]["result"]["freelancerId"] == "a"
        assert data[0]["result"]["matchScore"] == 1.0
        assert data[0]["estimatedSuccessRate"] <= 1.0
        assert "keyStrengths" in data[0]["insights"]

    def test_example_request(self) -> None:
        run = run_matching(MatchRequest.from_file(_EXAMPLE_REQUEST), Settings())
        ada, bram = run.matches
        assert ada.result.freelancer_id == "fl-ada"
        assert ada.result.match_score == 1.0
        assert bram.result.freelancer_id == "fl-bram"
        assert len(bram.result.risk_factors) == 4
        assert "Consider providing training for: django" in bram.result.recommendations
        assert "Consider negotiating project-based pricing" in bram.result.recommendations


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCli:
    def test_match(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--request", str(_EXAMPLE_REQUEST)])
        out = capsys.readouterr().out
        assert "2 candidates, 2 eligible, 2 matched" in out
        assert "#1 fl-ada: 1.00" in out
        assert "risk: Slow response time" in out

    def test_match_with_overrides(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--request", str(_EXAMPLE_REQUEST), "--min-score", "0.9", "--no-semantic"])
        out = capsys.readouterr().out
        assert "1 matched" in out
        assert "fl-bram" not in out

    def test_no_matches(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--request", str(_EXAMPLE_REQUEST), "--max-results", "0"])
        assert "No matches found." in capsys.readouterr().out

    def test_export_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--request", str(_EXAMPLE_REQUEST), "--export", "json"])
        out = capsys.readouterr().out
        data = json.loads(out[out.index("\n["):])
        assert [m["result"]["freelancerId"] for m in data] == ["fl-ada", "fl-bram"]

    def test_dry_run(self, capsys: pytest.CaptureFixture[str]) -> None:
        main([
            "match", "--request", str(_EXAMPLE_REQUEST),
            "--config", str(_EXAMPLE_SETTINGS), "--dry-run",
        ])
        out = capsys.readouterr().out
        assert "[DRY RUN] 2 candidates supplied" in out
        assert "[DRY RUN] 2 pass eligibility filters" in out
        assert "Matching complete" not in out

    def test_check_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check-config", "--config", str(_EXAMPLE_SETTINGS)])
        assert "Config OK" in capsys.readouterr().out

    def test_missing_request_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "--request", "/nonexistent/request.yaml"])
        assert exc_info.value.code == 1
        assert "Error: Request file not found" in capsys.readouterr().err

    def test_invalid_override_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "--request", str(_EXAMPLE_REQUEST), "--min-score", "2"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_config_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("options:\n  max_results: -3\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["check-config", "--config", str(config_file)])
        assert exc_info.value.code == 1
