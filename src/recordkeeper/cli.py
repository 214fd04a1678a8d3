"""CLI entrypoint for recordkeeper."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from recordkeeper.api.export import EXPORT_FORMATS, write_export
from recordkeeper.api.models import Notification, RecordsView
from recordkeeper.api.workspace import RecordWorkspace
from recordkeeper.config.loader import DEFAULT_CONFIG_PATH, dump_default_config, load_config_or_defaults
from recordkeeper.database.record_store import SqliteRecordStore
from recordkeeper.ingestion.record_ingestor import load_records
from recordkeeper.records.formatting import display_date, format_registration_code, format_tax_id
from recordkeeper.records.record_models import STATUS_FILTER_ALL, QueryState, Record, Status
from recordkeeper.runners.seed_sample import main as seed_sample_main
from recordkeeper.utils.logging import get_logger
from recordkeeper.utils.time import today_iso

logger = get_logger(__name__)


def _load_config(args: argparse.Namespace) -> Dict[str, Any]:
    return load_config_or_defaults(getattr(args, "config", None))


def _open_workspace(config: Dict[str, Any]) -> RecordWorkspace:
    """Open a workspace on the configured store and load its records (exits on failure)."""
    store = SqliteRecordStore(config["storage"]["sqlite_path"])
    workspace = RecordWorkspace(
        store,
        state=QueryState(page_size=config["table"]["page_size"]),
        report_options=config.get("report", {}),
    )
    _report(workspace.refresh(), quiet_success=True)
    return workspace


def _report(notification: Notification, quiet_success: bool = False) -> None:
    """Print a notification; exit non-zero on errors."""
    if not notification.ok:
        print(f"[recordkeeper] {notification.message}", file=sys.stderr)
        sys.exit(1)
    if not quiet_success:
        print(notification.message)


def _apply_query_args(workspace: RecordWorkspace, args: argparse.Namespace, config: Dict[str, Any]) -> None:
    page_size = getattr(args, "page_size", None) or workspace.state.page_size
    options = config["table"]["page_size_options"]
    if page_size not in options:
        raise ValueError(f"--page-size must be one of {options}")
    workspace.update_query(
        search_text=args.search,
        status_filter=args.status,
        sort_field=args.sort,
        sort_order=args.order,
        page_size=page_size,
    )
    page = getattr(args, "page", None)
    if page:
        workspace.go_to_page(page)


def _format_table(view: RecordsView) -> List[str]:
    page = view.page
    lines = []
    header = f"{'ID':<36}  {'Name':<28}  {'TaxId':<14}  {'Code':<9}  {'Date':<10}  Status"
    lines.append(header)
    lines.append("-" * len(header))
    for record in page.items:
        lines.append(
            f"{record.id or '':<36}  {record.full_name[:28]:<28}  {record.tax_id:<14}  "
            f"{record.registration_code:<9}  {display_date(record.registration_date):<10}  {record.status}"
        )
    if not page.items:
        lines.append("No records found.")
    lines.append("")
    pages = page.total_pages
    lines.append(
        f"Page {page.page} of {pages} | {view.filtered_total} matching "
        f"of {view.collection_total} records"
        + (" | prev" if page.has_previous else "")
        + (" | next" if page.has_next else "")
    )
    return lines


def cmd_init(args: argparse.Namespace) -> None:
    """Write an example configuration file."""
    target = args.config or DEFAULT_CONFIG_PATH
    if target.exists() and not args.force:
        print(f"Config already exists: {target} (use --force to overwrite)")
        return
    target.write_text(dump_default_config(), encoding="utf-8")
    print(f"Wrote {target}")


def cmd_seed(args: argparse.Namespace) -> None:
    config = _load_config(args)
    if args.fixture:
        config["seed"]["fixture_json"] = str(args.fixture)
    count = seed_sample_main(config)
    print(f"Seeded {count} records")


def cmd_list(args: argparse.Namespace) -> None:
    config = _load_config(args)
    workspace = _open_workspace(config)
    _apply_query_args(workspace, args, config)
    view = workspace.view()
    if args.format == "json":
        print(view.model_dump_json(indent=2))
    else:
        print("\n".join(_format_table(view)))


def cmd_summary(args: argparse.Namespace) -> None:
    config = _load_config(args)
    workspace = _open_workspace(config)
    summary = workspace.summary()
    if args.format == "json":
        print(summary.model_dump_json(indent=2))
        return

    cards = summary.cards
    print(f"Total records: {cards.total}")
    print(f"Under review (IH): {cards.under_review} | Authorized: {cards.authorized} | Pending: {cards.pending}")
    print("")
    print("By status:")
    for entry in summary.chart:
        print(f"  {entry.status}: {entry.count}")
    print("")
    print("Recent activity:")
    if not summary.recent:
        print("  No records found.")
    for record in summary.recent:
        print(f"  {display_date(record.registration_date)}  {record.full_name} ({record.status})")
    if summary.total > len(summary.recent):
        print(f"  Showing {len(summary.recent)} of {summary.total} records")


def cmd_export(args: argparse.Namespace) -> None:
    """Export every record matching the query (not just one page)."""
    config = _load_config(args)
    try:
        workspace = _open_workspace(config)
        _apply_query_args(workspace, args, config)
        document = workspace.export(args.export_format)
        out_dir = args.out or Path(config["export"]["out_dir"])
        path = write_export(document, out_dir)
        print(f"Exported to {path}")
    except Exception as e:
        logger.error(f"Error exporting: {e}", exc_info=True)
        raise


def cmd_save(args: argparse.Namespace) -> None:
    """Create a record, or update one when --id names an existing record."""
    config = _load_config(args)
    workspace = _open_workspace(config)

    existing: Optional[Record] = None
    if args.id:
        existing = next((r for r in workspace.records if r.id == args.id), None)
        if existing is None:
            print(f"[recordkeeper] Record not found: {args.id}", file=sys.stderr)
            sys.exit(1)

    values: Dict[str, Any] = existing.model_dump() if existing else {
        "full_name": "",
        "registration_date": today_iso(),
        "status": Status.PENDING.value,
    }
    updates = {
        "full_name": args.name,
        "tax_id": format_tax_id(args.tax_id) if args.tax_id is not None else None,
        "registration_code": format_registration_code(args.code) if args.code is not None else None,
        "registration_date": args.date,
        "contact_info": args.contact,
        "notes": args.notes,
        "status": args.status,
    }
    values.update({k: v for k, v in updates.items() if v is not None})
    _report(workspace.save(Record(**values)))


def cmd_delete(args: argparse.Namespace) -> None:
    config = _load_config(args)
    workspace = _open_workspace(config)
    _report(workspace.remove(args.record_id))


def cmd_import(args: argparse.Namespace) -> None:
    config = _load_config(args)
    workspace = _open_workspace(config)
    records = load_records(args.path)
    failures = 0
    for record in records:
        notification = workspace.save(record)
        if not notification.ok:
            failures += 1
    print(f"Imported {len(records) - failures} of {len(records)} records from {args.path}")
    if failures:
        sys.exit(1)


def _add_query_arguments(parser: argparse.ArgumentParser, paged: bool = True) -> None:
    parser.add_argument("--search", type=str, default="", help="Search name, tax id, code or contact")
    parser.add_argument(
        "--status",
        type=str,
        default=STATUS_FILTER_ALL,
        help=f"Status filter: all or one of {', '.join(s.value for s in Status)} (default: all)",
    )
    parser.add_argument(
        "--sort",
        type=str,
        choices=["full_name", "registration_date"],
        default="full_name",
        help="Sort field (default: full_name)",
    )
    parser.add_argument("--order", type=str, choices=["asc", "desc"], default="asc", help="Sort order (default: asc)")
    if paged:
        parser.add_argument("--page", type=int, default=1, help="Page number, 1-indexed (default: 1)")
        parser.add_argument("--page-size", type=int, help="Rows per page (default: from config)")


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="recordkeeper",
        description="Search, summarize and export person records",
    )
    parser.add_argument("--config", type=Path, help="Config file (default: recordkeeper.config.yaml)")
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    # init command
    init_parser = subparsers.add_parser("init", help="Write an example config file")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing config file")
    init_parser.set_defaults(func=cmd_init)
    
    # seed command
    seed_parser = subparsers.add_parser("seed", help="Load the sample records into the store")
    seed_parser.add_argument("--fixture", type=Path, help="JSON fixture (default: from config)")
    seed_parser.set_defaults(func=cmd_seed)
    
    # list command
    list_parser = subparsers.add_parser("list", help="Show one page of matching records")
    _add_query_arguments(list_parser)
    list_parser.add_argument("--format", type=str, choices=["text", "json"], default="text", help="Output format")
    list_parser.set_defaults(func=cmd_list)
    
    # summary command
    summary_parser = subparsers.add_parser("summary", help="Show status counts and recent activity")
    summary_parser.add_argument("--format", type=str, choices=["text", "json"], default="text", help="Output format")
    summary_parser.set_defaults(func=cmd_summary)
    
    # export command
    export_parser = subparsers.add_parser("export", help="Export all matching records")
    export_parser.add_argument("export_format", choices=list(EXPORT_FORMATS), help="csv or report (.doc)")
    _add_query_arguments(export_parser, paged=False)
    export_parser.add_argument("--out", type=Path, help="Output directory (default: from config)")
    export_parser.set_defaults(func=cmd_export)
    
    # save command
    save_parser = subparsers.add_parser("save", help="Create a record, or update one with --id")
    save_parser.add_argument("--id", type=str, help="Id of an existing record to update")
    save_parser.add_argument("--name", type=str, help="Full name")
    save_parser.add_argument("--tax-id", type=str, help="Tax id (digits; mask is applied)")
    save_parser.add_argument("--code", type=str, help="Registration code (up to 9 digits)")
    save_parser.add_argument("--date", type=str, help="Registration date YYYY-MM-DD (default: today)")
    save_parser.add_argument("--contact", type=str, help="Email and/or phone")
    save_parser.add_argument("--notes", type=str, help="Free-text notes")
    save_parser.add_argument("--status", type=str, choices=[s.value for s in Status], help="Status")
    save_parser.set_defaults(func=cmd_save)
    
    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a record by id")
    delete_parser.add_argument("record_id", type=str, help="Record id")
    delete_parser.set_defaults(func=cmd_delete)
    
    # import command
    import_parser = subparsers.add_parser("import", help="Import records from a JSON or exported CSV file")
    import_parser.add_argument("path", type=Path, help="Path to .json or .csv file")
    import_parser.set_defaults(func=cmd_import)
    
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return
    
    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
