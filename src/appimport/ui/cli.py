from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from appimport.app import dump_import_config, import_charts
from appimport.config import DEFAULT_IMPORT_CONFIG_PATH, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_CHART_DIR = Path("/root/package")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import chart bundles into the app store")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import chart archives from a directory")
    import_cmd.add_argument(
        "--chart-dir",
        type=Path,
        default=DEFAULT_CHART_DIR,
        help="Directory holding the chart archives (default: %(default)s)",
    )
    import_cmd.add_argument(
        "--import-config",
        type=Path,
        default=DEFAULT_IMPORT_CONFIG_PATH,
        help="YAML file with name replacements, category icons and annotations "
        "(default: %(default)s)",
    )

    dump = subparsers.add_parser("dump-config", help="Log the effective import configuration")
    dump.add_argument(
        "--import-config",
        type=Path,
        default=DEFAULT_IMPORT_CONFIG_PATH,
        help="YAML file to read (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "import":
            report = import_charts(
                parsed_args.chart_dir,
                import_config_path=parsed_args.import_config,
            )
        elif parsed_args.command == "dump-config":
            log.info("Import config:\n%s", dump_import_config(parsed_args.import_config))
            return
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)

    if report.failed:
        for outcome in report.failed:
            log.error("Failed to import %s: %s", outcome.path.name, outcome.error)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
