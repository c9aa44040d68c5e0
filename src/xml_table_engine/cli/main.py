"""Main CLI entry point for the xml-table-engine command-line tool.

Provides commands to list, show, export and edit the tables of an XML
document. Every editing command loads the file, applies one change through
the engine and saves it back.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from xml_table_engine import __version__
from xml_table_engine.api import DocumentEngine, read_csv_grid, write_csv_grid
from xml_table_engine.shared import (
    ConfigError,
    EngineConfig,
    OperationResult,
    configure_logging,
    get_logger,
)
from xml_table_engine.tables import Grid

logger = get_logger(__name__, None, "cli")


def load_config(config_path: Optional[Path]) -> EngineConfig:
    """Load engine configuration from a JSON file, or return the defaults."""
    if config_path is None:
        return EngineConfig()
    return EngineConfig.from_json(config_path.read_text(encoding="utf-8"))


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-table-engine",
        description="View and edit tables stored in XML documents"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Engine configuration file (JSON)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tables_parser = subparsers.add_parser("tables", help="List the tables of a document")
    tables_parser.add_argument("file", type=Path, help="XML document")

    show_parser = subparsers.add_parser("show", help="Print one table")
    show_parser.add_argument("file", type=Path, help="XML document")
    show_parser.add_argument("table", help="Table name")
    show_parser.add_argument(
        "--format", "-f",
        choices=["text", "json", "csv"],
        default="text",
        help="Output format (default: text)"
    )

    export_parser = subparsers.add_parser("export", help="Export a table as CSV")
    export_parser.add_argument("file", type=Path, help="XML document")
    export_parser.add_argument("table", help="Table name")
    export_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    import_parser = subparsers.add_parser("import", help="Replace a table from a CSV file")
    import_parser.add_argument("file", type=Path, help="XML document")
    import_parser.add_argument("table", help="Table name")
    import_parser.add_argument("csv", type=Path, help="CSV file with a header line")

    add_parser = subparsers.add_parser("add-row", help="Append a row to a table")
    add_parser.add_argument("file", type=Path, help="XML document")
    add_parser.add_argument("table", help="Table name")
    add_parser.add_argument("values", nargs="*", help="Cell values in column order")

    delete_parser = subparsers.add_parser("delete-row", help="Delete a row from a table")
    delete_parser.add_argument("file", type=Path, help="XML document")
    delete_parser.add_argument("table", help="Table name")
    delete_parser.add_argument("index", type=int, help="0-based row index")

    set_parser = subparsers.add_parser("set-cell", help="Change one cell of a table")
    set_parser.add_argument("file", type=Path, help="XML document")
    set_parser.add_argument("table", help="Table name")
    set_parser.add_argument("row", type=int, help="0-based row index")
    set_parser.add_argument("column", help="0-based column index or column header")
    set_parser.add_argument("value", help="New cell value")

    return parser


def format_grid(grid: Grid, table: str, format_type: str) -> str:
    """Format a grid for output."""
    if format_type == "json":
        return json.dumps({"table": table, **grid.to_dict()}, indent=2, ensure_ascii=False)

    if format_type == "csv":
        return write_csv_grid(grid).rstrip("\n")

    if not grid.headers:
        return f"{table}: no columns ({grid.row_count} rows)"

    widths = [len(header) for header in grid.headers]
    for row in range(grid.row_count):
        for column in range(grid.column_count):
            widths[column] = max(widths[column], len(grid.cell(row, column)))

    def render(values: List[str]) -> str:
        return " | ".join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

    lines = [render(grid.headers), "-+-".join("-" * width for width in widths)]
    for row in range(grid.row_count):
        lines.append(render([grid.cell(row, column) for column in range(grid.column_count)]))
    lines.append(f"({grid.row_count} rows)")
    return "\n".join(lines)


def _report_failure(result: OperationResult) -> int:
    print(f"Error: {result.error}", file=sys.stderr)
    return 1


def _open(engine: DocumentEngine, path: Path) -> Optional[OperationResult]:
    """Load ``path``; returns the failed result, or None on success."""
    result = engine.load(path)
    return None if result.success else result


def _apply_and_save(engine: DocumentEngine, result: OperationResult) -> int:
    if not result.success:
        return _report_failure(result)
    saved = engine.save()
    if not saved.success:
        return _report_failure(saved)
    print(f"Saved {engine.current_path}", file=sys.stderr)
    return 0


def cmd_tables(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle tables command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    for name in engine.list_tables():
        print(name)
    return 0


def cmd_show(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle show command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    result = engine.get_table(args.table)
    if not result.success:
        return _report_failure(result)

    print(format_grid(result.value, args.table, args.format))
    return 0


def cmd_export(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle export command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    result = engine.get_table(args.table)
    if not result.success:
        return _report_failure(result)

    if args.output:
        try:
            write_csv_grid(result.value, args.output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Table '{args.table}' written to {args.output}", file=sys.stderr)
    else:
        print(write_csv_grid(result.value), end="")
    return 0


def cmd_import(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle import command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    try:
        grid = read_csv_grid(args.csv)
    except (OSError, ValueError) as e:
        print(f"Error reading CSV: {e}", file=sys.stderr)
        return 1

    return _apply_and_save(engine, engine.replace_table(args.table, grid))


def cmd_add_row(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle add-row command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    return _apply_and_save(engine, engine.add_row(args.table, args.values))


def cmd_delete_row(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle delete-row command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    return _apply_and_save(engine, engine.delete_row(args.table, args.index))


def cmd_set_cell(engine: DocumentEngine, args: argparse.Namespace) -> int:
    """Handle set-cell command."""
    failed = _open(engine, args.file)
    if failed is not None:
        return _report_failure(failed)

    result = engine.get_table(args.table)
    if not result.success:
        return _report_failure(result)

    grid = result.value
    try:
        column = int(args.column) if args.column.isdigit() else grid.column_index(args.column)
        grid.set_cell(args.row, column, args.value)
    except (IndexError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return _apply_and_save(engine, engine.replace_table(args.table, grid))


COMMANDS = {
    "tables": cmd_tables,
    "show": cmd_show,
    "export": cmd_export,
    "import": cmd_import,
    "add-row": cmd_add_row,
    "delete-row": cmd_delete_row,
    "set-cell": cmd_set_cell,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ConfigError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)

    engine = DocumentEngine(config)
    logger.debug("Running command", extra={"command": args.command})

    try:
        return COMMANDS[args.command](engine, args)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
