"""Command line entry point for the job fit engine."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from src import __version__
from src.config.settings import Settings
from src.scoring.errors import ValidationError
from src.utils.logging import configure_logging


def _timestamp_run_id(prefix: str) -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}"


def _resolve_run_dir(
    settings: Settings, *, prefix: str, out_run_dir: Path | None
) -> Path:
    if out_run_dir is not None:
        run_dir = out_run_dir
    else:
        run_dir = settings.output_dir / "runs" / _timestamp_run_id(prefix)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _write_json(path: Path, payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    path.write_text(
        json.dumps(payload, indent=2, default=_default),
        encoding="utf-8",
    )


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profile",
        type=Path,
        required=True,
        help="Path to the candidate profile (YAML/JSON)",
    )
    parser.add_argument(
        "--jobs",
        type=Path,
        required=True,
        help="Path to a job pool file (JSON/YAML) or a directory of *.json files",
    )


def _add_threshold_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max",
        dest="max_recommendations",
        type=int,
        default=None,
        help="Maximum number of recommendations to return",
    )
    parser.add_argument(
        "--min-fit",
        dest="min_fit_score",
        type=float,
        default=None,
        help="Minimum overall fit score (0-100)",
    )
    parser.add_argument(
        "--min-confidence",
        type=float,
        default=None,
        help="Minimum confidence (0.0-1.0)",
    )
    parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Directory for the JSON report (defaults to a timestamped run dir)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="job-fit",
        description="Job fit scoring and recommendations for a candidate profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src score --profile profile.yaml --jobs jobs.json --job-id job-1
  python -m src recommend --profile profile.yaml --jobs jobs.json --max 5
  python -m src scenarios --profile profile.yaml --jobs jobs/
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    score_parser = subparsers.add_parser(
        "score",
        help="Show the fit breakdown for one job",
    )
    _add_input_arguments(score_parser)
    score_parser.add_argument(
        "--job-id",
        required=True,
        help="Identifier of the job to score",
    )

    recommend_parser = subparsers.add_parser(
        "recommend",
        help="Rank the job pool and summarize the results",
    )
    _add_input_arguments(recommend_parser)
    _add_threshold_arguments(recommend_parser)

    scenarios_parser = subparsers.add_parser(
        "scenarios",
        help="Rank the job pool under each weighting scenario",
    )
    _add_input_arguments(scenarios_parser)
    _add_threshold_arguments(scenarios_parser)

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except PydanticValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"job-fit v{__version__} running {parsed.mode}")

    from src.recommendations.service import RecommendationEngine
    from src.scoring.models import MatchCriteria
    from src.scoring.profile import ProfileService

    profile_service = ProfileService()
    try:
        profile = profile_service.load_profile(parsed.profile)
        jobs = profile_service.load_jobs(parsed.jobs)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Covers malformed files and pydantic validation errors.
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in profile_service.validate_profile(profile):
        logger.warning(f"Profile {profile.id}: {warning}")

    engine = RecommendationEngine()
    try:
        criteria = MatchCriteria.from_profile(profile)
        if parsed.mode == "score":
            return _run_score(engine, criteria, jobs, parsed.job_id)

        config = engine.settings.to_config(
            max_recommendations=parsed.max_recommendations,
            min_fit_score=parsed.min_fit_score,
            min_confidence=parsed.min_confidence,
        )
        run_dir = _resolve_run_dir(
            settings, prefix=parsed.mode, out_run_dir=parsed.out_run_dir
        )
        if parsed.mode == "recommend":
            return _run_recommend(engine, criteria, jobs, config, run_dir)
        if parsed.mode == "scenarios":
            return _run_scenarios(engine, criteria, jobs, config, run_dir)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def _run_score(engine, criteria, jobs, job_id: str) -> int:
    job = next((j for j in jobs if j.id == job_id), None)
    if job is None:
        print(f"Error: job not found: {job_id}", file=sys.stderr)
        return 1

    match = engine.scoring.evaluate(criteria, job)
    print(engine.scoring.format_match(match))
    return 0


def _run_recommend(engine, criteria, jobs, config, run_dir: Path) -> int:
    matches = engine.generate_recommendations(criteria, jobs, config)
    insights = engine.generate_insights(matches)

    if not matches:
        print("No jobs passed the recommendation thresholds.")
    for rank, match in enumerate(matches, start=1):
        print(f"#{rank} {engine.scoring.format_match(match)}")
        print()

    print(
        f"Matches: {insights.total_matches} "
        f"(mean fit={insights.mean_fit_score:.2f}, "
        f"mean confidence={insights.mean_confidence:.2f})"
    )
    if insights.top_gaps:
        gaps = ", ".join(f"{dim.value} ({count})" for dim, count in insights.top_gaps)
        print(f"Most common gaps: {gaps}")

    output_path = run_dir / "recommendations.json"
    _write_json(
        output_path,
        {
            "generated_at": datetime.now(UTC).isoformat(),
            "config": {
                "max_recommendations": config.max_recommendations,
                "min_fit_score": config.min_fit_score,
                "min_confidence": config.min_confidence,
            },
            "matches": matches,
            "insights": insights,
        },
    )
    print(f"Wrote: {output_path}")
    return 0


def _run_scenarios(engine, criteria, jobs, config, run_dir: Path) -> int:
    scenarios = engine.get_scenario_recommendations(criteria, jobs, config)

    for name, matches in scenarios.items():
        print(f"[{name}] {len(matches)} match(es)")
        for rank, match in enumerate(matches, start=1):
            title = match.job.title or match.job.id
            print(
                f"  #{rank} {title} @ {match.job.company or '-'} "
                f"(overall={match.fit_score.overall:.2f}, "
                f"confidence={match.fit_score.confidence:.2f})"
            )

    output_path = run_dir / "scenarios.json"
    _write_json(output_path, scenarios)
    print(f"Wrote: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
