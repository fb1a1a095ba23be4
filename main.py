"""CLI entry point for the freelancer matching engine."""

import argparse
import logging
import sys

from freelance_match.core.config import MatchingOptions, Settings
from freelance_match.core.request import MatchRequest
from freelance_match.pipeline.filters import build_filters, run_filter_chain
from freelance_match.pipeline.orchestrator import export_results_json, run_matching


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Freelancer matching engine - rank freelancer profiles against project criteria",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- match subcommand ---
    match_parser = subparsers.add_parser("match", help="Score and rank candidates for a request")
    match_parser.add_argument(
        "--request",
        required=True,
        help="Path to a YAML/JSON file with criteria and candidates",
    )
    match_parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    match_parser.add_argument(
        "--max-results",
        type=int,
        help="Override options.max_results",
    )
    match_parser.add_argument(
        "--min-score",
        type=float,
        help="Override options.min_score",
    )
    match_parser.add_argument(
        "--no-semantic",
        action="store_true",
        help="Disable the tag-overlap score boost",
    )
    match_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which candidates pass the eligibility filters without scoring",
    )
    match_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    match_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- check-config subcommand ---
    check_parser = subparsers.add_parser("check-config", help="Validate a settings YAML file")
    check_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    check_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> Settings:
    return Settings.from_yaml(path) if path else Settings()


def effective_options(settings: Settings, args: argparse.Namespace) -> MatchingOptions:
    """Merge CLI overrides into the configured options (re-validated)."""
    overrides: dict[str, object] = {}
    if args.max_results is not None:
        overrides["max_results"] = args.max_results
    if args.min_score is not None:
        overrides["min_score"] = args.min_score
    if args.no_semantic:
        overrides["use_semantic_search"] = False
    return MatchingOptions.model_validate({**settings.options.model_dump(), **overrides})


def dry_run(request: MatchRequest, settings: Settings, options: MatchingOptions) -> None:
    """Print what would happen without scoring."""
    filters = build_filters(request.criteria, settings.filters, request.exclude_profiles)
    eligible = run_filter_chain(list(request.candidates), filters)

    print(f"[DRY RUN] {len(request.candidates)} candidates supplied")
    print(f"[DRY RUN] {len(eligible)} pass eligibility filters")
    for profile in eligible:
        print(f"  {profile.id}")
    print(f"[DRY RUN] Options: {options.model_dump()}")
    print(f"[DRY RUN] Weights: {settings.scoring.weights.model_dump()}")


def cmd_match(args: argparse.Namespace) -> None:
    """Handle match subcommand."""
    settings = load_settings(args.config)
    options = effective_options(settings, args)
    request = MatchRequest.from_file(args.request)

    if args.dry_run:
        dry_run(request, settings, options)
        return

    run = run_matching(request, settings, options)

    print(f"\nMatching complete: {run.candidate_count} candidates, "
          f"{run.eligible_count} eligible, {run.matched_count} matched.")
    if not run.matches:
        print("No matches found.")

    for m in run.matches:
        r = m.result
        print(f"  #{m.rank} {r.freelancer_id}: {r.match_score:.2f} "
              f"({m.confidence}, {m.recommendation}) - {r.reasoning}")
        for risk in r.risk_factors:
            print(f"      risk: {risk}")

    if args.export == "json":
        print(f"\n{export_results_json(run)}")


def cmd_check_config(args: argparse.Namespace) -> None:
    """Handle check-config subcommand."""
    settings = Settings.from_yaml(args.config)
    print(f"Config OK: {args.config}")
    print(f"  Weights: {settings.scoring.weights.model_dump()}")
    print(f"  Semantic boost weight: {settings.scoring.semantic_boost_weight}")
    print(f"  Options: {settings.options.model_dump()}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    handler = cmd_match if args.command == "match" else cmd_check_config
    try:
        handler(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
