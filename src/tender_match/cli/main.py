"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    from tender_match.sources import SourceRegistry

    parser = argparse.ArgumentParser(
        prog="tender-match",
        description="Rank procurement opportunities against a service provider profile",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # rank
    rank_parser = subparsers.add_parser("rank", help="Dedupe, score and rank opportunities")
    rank_parser.add_argument(
        "--profile",
        type=Path,
        default=None,
        help="Path to profile YAML (default: $TENDER_MATCH_PROFILE or bundled profile)",
    )
    rank_parser.add_argument(
        "--input",
        type=Path,
        action="append",
        default=None,
        help="JSON file of opportunities; repeat for several feeds",
    )
    rank_parser.add_argument(
        "--source",
        action="append",
        default=None,
        choices=SourceRegistry.builtin_sources(),
        help="Built-in source to include",
    )
    rank_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write ranked results to file (default: stdout)",
    )
    rank_parser.add_argument(
        "--stats",
        action="store_true",
        help="Print summary counters to stderr",
    )
    rank_parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Reference date for urgency (YYYY-MM-DD, default: today)",
    )

    # check-profile
    check_parser = subparsers.add_parser("check-profile", help="Validate a profile YAML")
    check_parser.add_argument("--profile", type=Path, required=True, help="Path to profile YAML")

    # sources
    subparsers.add_parser("sources", help="List available sources")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "rank":
        _run_rank(args)
    elif args.command == "check-profile":
        _run_check_profile(args)
    elif args.command == "sources":
        _run_sources()
    else:
        parser.print_help()


def _run_rank(args: argparse.Namespace) -> None:
    """Run rank command."""
    from tender_match.models.profile import ProfileConfigError, load_profile
    from tender_match.pipeline import run_pipeline
    from tender_match.ranking import display_fields
    from tender_match.sources import JsonFileSource, SourceRegistry

    today = None
    if args.today:
        try:
            today = date.fromisoformat(args.today)
        except ValueError:
            raise SystemExit("Invalid --today format. Use YYYY-MM-DD.")

    try:
        profile = load_profile(args.profile)
    except ProfileConfigError as e:
        raise SystemExit(str(e))

    sources = [SourceRegistry.get(s) for s in args.source or []]
    sources += [JsonFileSource(p, source_id=p.stem) for p in args.input or []]
    if not sources:
        raise SystemExit("Nothing to rank. Pass --input FILE or --source sample.")

    result = run_pipeline(sources, profile, today=today)

    if args.stats:
        _print_stats(result)

    output_data = {
        "matches": [
            {**m.model_dump(mode="json"), **display_fields(m, today)}
            for m in result.matches
        ],
        "stats": result.stats.model_dump(mode="json"),
        "summary": result.summary(),
    }
    output = json.dumps(output_data, indent=2, default=str)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Ranked: {len(result.matches)} matched of {result.stats.total} (wrote to {args.output})")
    else:
        print(output)


def _print_stats(result) -> None:
    """Print summary counters to stderr."""
    stats = result.stats
    summary = result.summary()
    out = sys.stderr
    print(f"\n--- Match stats: {stats.matched}/{stats.total} matched ---", file=out)
    print(f"  Priority: high={stats.high} medium={stats.medium} low={stats.low}", file=out)
    print(f"  Urgent (<= 14 days): {stats.urgent}", file=out)
    print(f"  Total value: {stats.total_value:,.0f}", file=out)
    print(f"  Duplicates removed: {summary['duplicates_removed']}", file=out)
    print(f"  Invalid records: {summary['invalid_records']}", file=out)
    if summary["failed_sources"]:
        print(f"  Failed sources: {', '.join(summary['failed_sources'])}", file=out)
    if result.failed_ids:
        print(f"  Scoring errors: {', '.join(result.failed_ids)}", file=out)
    print(file=out)


def _run_check_profile(args: argparse.Namespace) -> None:
    """Run check-profile command."""
    from tender_match.models.profile import ProfileConfigError, ServiceProfile

    try:
        profile = ServiceProfile.from_yaml(args.profile)
    except ProfileConfigError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1)
    print(
        f"Profile {profile.profile_id}: {len(profile.services)} services, "
        f"{profile.total_keyword_count} keywords, "
        f"{len(profile.exclude_keywords)} exclusions, "
        f"{len(profile.preferred_sectors)} preferred sectors"
    )


def _run_sources() -> None:
    """Run sources command."""
    from tender_match.sources import SourceRegistry

    for name in SourceRegistry.available_sources():
        print(name)


if __name__ == "__main__":
    main()
