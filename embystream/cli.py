"""Command-line entry point of the streaming application."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .logger import LoggerBuilder, LogLevel, info_log


def _setup_logger() -> None:
    LoggerBuilder().with_level(LogLevel.DEBUG).build()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the application and return its exit status."""
    parser = argparse.ArgumentParser(
        prog="embystream",
        description="Emby streaming application with separate frontend and backend.",
    )
    parser.parse_args(argv)

    _setup_logger()
    info_log("Starting Emby Stream application")
    return 0


if __name__ == "__main__":
    sys.exit(main())