"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="agreement-sync", description="Distributor agreement sync and renewal tracking"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (default: environment variables only)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sync
    sync_parser = subparsers.add_parser("sync", help="Sync agreements from Navigator into the cache")
    sync_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    sync_parser.add_argument(
        "--token-file",
        type=Path,
        default=None,
        help="Token JSON file (default: NAVIGATOR_ACCESS_TOKEN environment variable)",
    )
    sync_parser.add_argument(
        "--details",
        action="store_true",
        help="Fetch each agreement's detail record after the list",
    )
    sync_parser.add_argument("--navigator-url", type=str, default=None, help="Navigator API base URL")
    sync_parser.add_argument("--output", type=Path, default=None, help="Write sync result JSON to file")

    # agreements
    agreements_parser = subparsers.add_parser("agreements", help="List cached agreements")
    agreements_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    agreements_parser.add_argument(
        "--urgency",
        type=str,
        default=None,
        choices=["Urgent", "Warning", "On Track"],
        help="Filter by renewal urgency",
    )
    agreements_parser.add_argument(
        "--risk",
        type=str,
        default=None,
        choices=["Low", "Medium", "High"],
        help="Filter by risk tier",
    )
    agreements_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    # conflicts
    conflicts_parser = subparsers.add_parser("conflicts", help="List cached territory/product conflicts")
    conflicts_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    conflicts_parser.add_argument(
        "--severity",
        type=str,
        default=None,
        choices=["High", "Medium"],
        help="Filter by severity",
    )
    conflicts_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    # process
    process_parser = subparsers.add_parser(
        "process", help="Normalize, enrich and conflict-check raw agreements from a JSON file"
    )
    process_parser.add_argument("--input", type=Path, required=True, help="JSON list of raw agreements")
    process_parser.add_argument("--now", type=str, default=None, help="Reference time (ISO-8601)")
    process_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    # demo
    demo_parser = subparsers.add_parser("demo", help="Process the built-in demo agreements")
    demo_parser.add_argument("--now", type=str, default=None, help="Reference time (ISO-8601)")
    demo_parser.add_argument("--output", type=Path, default=None, help="Write JSON to file")

    # history
    history_parser = subparsers.add_parser("history", help="Show recent sync runs")
    history_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    history_parser.add_argument("--limit", type=int, default=20, help="Max runs to show (default: 20)")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "sync":
        _run_sync(args)
    elif args.command == "agreements":
        _run_agreements(args)
    elif args.command == "conflicts":
        _run_conflicts(args)
    elif args.command == "process":
        _run_process(args)
    elif args.command == "demo":
        _run_demo(args)
    elif args.command == "history":
        _run_history(args)
    else:
        parser.print_help()


def _load_settings(args: argparse.Namespace):
    from agreement_sync.config import SyncSettings
    from agreement_sync.errors import ConfigurationError

    try:
        settings = SyncSettings.from_yaml(args.config) if args.config else SyncSettings.from_env()
    except ConfigurationError as e:
        raise SystemExit(str(e))

    updates = {}
    if getattr(args, "db", None) is not None:
        updates["db_path"] = args.db
    if getattr(args, "token_file", None) is not None:
        updates["token_file"] = args.token_file
    if getattr(args, "navigator_url", None):
        updates["navigator_url"] = args.navigator_url
    if getattr(args, "details", False):
        updates["fetch_details"] = True
    return settings.model_copy(update=updates)


def _parse_now(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise SystemExit("Invalid --now format. Use ISO-8601, e.g. 2025-01-15T00:00:00Z.")
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _emit(data, output: Optional[Path], summary: str) -> None:
    text = json.dumps(data, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        print(f"{summary} (wrote to {output})")
    else:
        print(text)


def _run_sync(args: argparse.Namespace) -> None:
    """Run sync command."""
    from agreement_sync.auth import EnvCredentialProvider, TokenFileCredentialProvider
    from agreement_sync.connectors.registry import ConnectorRegistry
    from agreement_sync.store import SqliteCacheStore
    from agreement_sync.sync import FixedDelay, SyncOrchestrator

    settings = _load_settings(args)
    connector = ConnectorRegistry.from_settings(settings)
    credentials = (
        TokenFileCredentialProvider(settings.token_file)
        if settings.token_file
        else EnvCredentialProvider()
    )
    store = SqliteCacheStore(settings.db_path)
    orchestrator = SyncOrchestrator(
        connector,
        credentials,
        store,
        fetch_details=settings.fetch_details,
        delay_policy=FixedDelay(settings.request_delay_seconds),
    )

    run_record = store.start_run(connector.source_id)
    result = orchestrator.sync()
    store.finish_run(
        run_record.id,
        agreements_synced=result.count,
        conflicts_found=result.conflict_count,
        used_sample_data=result.using_sample_data,
        status="completed" if result.success else "failed",
        error_message=result.error,
    )

    _emit(result.model_dump(mode="json"), args.output, f"Sync finished: {result.count} agreements")
    if not result.success:
        print(f"Sync failed: {result.error}", file=sys.stderr)
        if result.using_cache:
            print("Previous cached results are still available.", file=sys.stderr)
        raise SystemExit(1)
    if result.using_sample_data:
        print("Agreement API unavailable; synced sample data.", file=sys.stderr)


def _load_cache(args: argparse.Namespace):
    from agreement_sync.store import SqliteCacheStore

    settings = _load_settings(args)
    cache = SqliteCacheStore(settings.db_path).load()
    if cache is None:
        print(
            "No cached agreements. Run sync first:\n  agreement-sync sync --token-file token.json",
            file=sys.stderr,
        )
        raise SystemExit(1)
    return cache


def _run_agreements(args: argparse.Namespace) -> None:
    """Run agreements command."""
    cache = _load_cache(args)
    agreements = cache.agreements
    if args.urgency:
        agreements = [a for a in agreements if a.renewal_urgency and a.renewal_urgency.value == args.urgency]
    if args.risk:
        agreements = [a for a in agreements if a.risk_tier and a.risk_tier.value == args.risk]
    _emit(
        [a.model_dump(mode="json") for a in agreements],
        args.output,
        f"{len(agreements)} of {len(cache.agreements)} agreements",
    )


def _run_conflicts(args: argparse.Namespace) -> None:
    """Run conflicts command."""
    cache = _load_cache(args)
    conflicts = cache.conflicts
    if args.severity:
        conflicts = [c for c in conflicts if c.severity.value == args.severity]
    _emit([c.model_dump(mode="json") for c in conflicts], args.output, f"{len(conflicts)} conflicts")


def _processed_output(agreements, conflicts) -> dict:
    return {
        "agreements": [a.model_dump(mode="json") for a in agreements],
        "conflicts": [c.model_dump(mode="json") for c in conflicts],
    }


def _run_process(args: argparse.Namespace) -> None:
    """Run process command."""
    from agreement_sync.models.raw import RawAgreement
    from agreement_sync.sync import process_agreements

    try:
        data = json.loads(args.input.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SystemExit(f"Could not read {args.input}: {e}")
    if isinstance(data, dict):
        data = data.get("agreements") or []
    if not isinstance(data, list):
        raise SystemExit(f"{args.input} must contain a JSON list of agreements")

    raw_list = [RawAgreement(data=item) for item in data if isinstance(item, dict)]
    agreements, conflicts = process_agreements(raw_list, _parse_now(args.now))
    _emit(
        _processed_output(agreements, conflicts),
        args.output,
        f"Processed {len(agreements)} agreements, {len(conflicts)} conflicts",
    )


def _run_demo(args: argparse.Namespace) -> None:
    """Run demo command."""
    from agreement_sync.connectors.sample import sample_agreements
    from agreement_sync.sync import process_agreements

    agreements, conflicts = process_agreements(sample_agreements(), _parse_now(args.now))
    _emit(
        _processed_output(agreements, conflicts),
        args.output,
        f"Processed {len(agreements)} demo agreements, {len(conflicts)} conflicts",
    )


def _run_history(args: argparse.Namespace) -> None:
    """Run history command."""
    from agreement_sync.store import SqliteCacheStore

    settings = _load_settings(args)
    runs = SqliteCacheStore(settings.db_path).list_runs(args.limit)
    if not runs:
        print("No sync runs recorded.")
        return
    for run in runs:
        sample = " (sample data)" if run.used_sample_data else ""
        line = (
            f"#{run.id} {run.started_at:%Y-%m-%d %H:%M} {run.source} {run.status}: "
            f"{run.agreements_synced} agreements, {run.conflicts_found} conflicts{sample}"
        )
        if run.error_message:
            line += f" - {run.error_message}"
        print(line)


if __name__ == "__main__":
    main()
