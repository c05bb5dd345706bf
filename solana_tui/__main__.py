"""Command-line entry point for the Solana TUI explorer."""

import argparse
import sys
from typing import List, Optional

from solana_tui import __version__
from solana_tui.config import get_logging_config, get_solana_config
from solana_tui.logging_config import configure_logging, get_logger
from solana_tui.utils.errors import ConfigurationError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solana-tui",
        description="Inspect Solana transactions and accounts from the terminal."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the explorer.

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``

    Returns:
        Process exit code
    """
    build_parser().parse_args(argv)

    try:
        logging_config = get_logging_config()
        solana_config = get_solana_config()
    except ConfigurationError as e:
        print(f"solana-tui: {e.message}", file=sys.stderr)
        return 2

    configure_logging(logging_config.log_level, logging_config.log_file)
    logger.info(f"Starting Solana TUI Explorer v{__version__}")

    from solana_tui.tui.app import ExplorerApp

    app = ExplorerApp(config=solana_config)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
