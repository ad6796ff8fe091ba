"""
CLI - Command-line interface for pg_seqcheck.

Connects to PostgreSQL (config file, flags/environment, or interactive
prompt) and, when a schema is given, reports sequences that are bound
to more than one column.
"""

import argparse
import logging
import sys
from typing import Optional, List, Callable

from .config import Config
from .connection import create_connection
from .credentials import (
    CredentialProvider,
    StaticCredentialProvider,
    PromptCredentialProvider,
)
from .log import get_logger
from .protocol.errors import SeqCheckError
from .report import render_report, render_json
from .runner.detector import CollisionDetector
from .ui.console import ConsoleUI


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pg_seqcheck",
        description="Find PostgreSQL sequences shared by more than one column",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Prompt for credentials, scan the public schema
    pg_seqcheck -s public

    # Credentials from a config file (or a directory holding config.toml/config.json)
    pg_seqcheck -c ./conf -s billing

    # Flags, one probe per distinct sequence, JSON output
    pg_seqcheck -H 10.0.0.21 -U postgres -d app -s public --dedupe --output json

Config file (TOML):
    [database]
    host = "localhost"
    port = 5432
    user = "postgres"
    password = ""
    name = "postgres"
    sslmode = "disable"

Environment Variables:
    PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE, PGSSLMODE
        """,
    )

    # Scan
    parser.add_argument(
        "-s", "--sequence-repeat",
        dest="sequence_repeat",
        metavar="SCHEMA",
        help="Find sequence repeats for schema. For example: -s users"
    )
    parser.add_argument(
        "--dedupe",
        action="store_true",
        help="Probe each distinct sequence default once instead of once per column"
    )

    # Config
    parser.add_argument(
        "-c", "--config",
        help="Path to config file or config directory"
    )

    # Database connection
    parser.add_argument(
        "-H", "--host",
        help="PostgreSQL host"
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        help="PostgreSQL port (default: 5432)"
    )
    parser.add_argument(
        "-U", "--user",
        help="PostgreSQL user (default: postgres)"
    )
    parser.add_argument(
        "-W", "--password",
        help="PostgreSQL password (or use PGPASSWORD env var)"
    )
    parser.add_argument(
        "-d", "--database",
        help="Database name"
    )
    parser.add_argument(
        "--sslmode",
        choices=["disable", "allow", "prefer", "require", "verify-ca", "verify-full"],
        help="SSL mode (default: disable)"
    )

    # Output
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        help="Report format (default: text)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging, including the SQL sent"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print the report"
    )

    return parser.parse_args(argv)


def build_credential_provider(config: Config, args) -> CredentialProvider:
    """
    Pick where credentials come from.

    A config file or an explicit host means they are known already;
    otherwise the user is asked.
    """
    if config.config_file is not None or getattr(args, "host", None):
        return StaticCredentialProvider(config.database)
    return PromptCredentialProvider(base=config.database)


def run_scan(conn, config: Config, ui: ConsoleUI) -> None:
    """Scan config.scan.schema and print the report."""
    detector = CollisionDetector(conn)

    with ui.scan_progress() as progress:
        task = progress.add_task(f"Probing {config.scan.schema}", total=None)

        def advance(probe, index, total):
            progress.update(
                task,
                total=total,
                completed=index,
                description=f"{probe.table_name}.{probe.column_name}",
            )

        detector.on_progress(advance)
        result = detector.run(config.scan)

    if config.output.format == "json":
        ui.print_report(render_json(result), leading_blank=False)
    else:
        ui.print_report(render_report(result), leading_blank=not result.is_empty)


def run(
    args,
    ui: Optional[ConsoleUI] = None,
    connect: Callable = create_connection,
    provider: Optional[CredentialProvider] = None,
) -> int:
    """
    Execute the command described by `args`.

    Returns:
        Process exit code
    """
    ui = ui or ConsoleUI(quiet=args.quiet)
    verbose = args.verbose
    logger = get_logger(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        config = Config.load(args.config)
        config.override_from_env().override_from_args(args)

        # file settings merged with flags
        ui.quiet = bool(config.output.quiet)
        verbose = bool(config.output.verbose)
        logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

        errors = config.validate()
        if errors:
            for error in errors:
                ui.print_error(error)
            return 1

        ui.print_banner()

        provider = provider or build_credential_provider(config, args)
        config.database = provider.provide()
        ui.print_config(config.summary())

        conn = connect(config.database)
        try:
            if config.scan.schema:
                run_scan(conn, config, ui)
            else:
                ui.print_success(f"Connected to {config.database.dsn_summary()}")
                ui.print("[dim]Nothing to do: pass -s SCHEMA to scan for sequence repeats[/]")
        finally:
            conn.close()

    except SeqCheckError as e:
        logger.debug("aborted: %s", e.to_json())
        ui.print_error(f"{e.error_type.value.lower()}: {e}")
        if verbose and e.details.failed_sql:
            ui.print_error(f"failed SQL: {e.details.failed_sql}")
        return 1
    except KeyboardInterrupt:
        ui.print_error("interrupted")
        return 130

    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
