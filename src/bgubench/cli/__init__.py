"""Command-line entry points for bgubench.

- filter.py: ``bgubench-filter input [output]``, guided upsampling benchmark
- burst.py: ``bgubench-burst [output]``, burst camera pipeline benchmark

Malformed invocations print the usage line to standard output and exit with
status 1 before any file is touched.
"""

import argparse
import logging


class UsageError(Exception):
    """Raised for a malformed command-line invocation."""


class HarnessArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str):
        raise UsageError(message)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to a TOML configuration file "
        "(default: $BGUBENCH_CONFIG, then ./bgubench.toml if present)",
    )


def configure_logging(level: str) -> None:
    """Send log records to stderr so stdout carries only the report."""
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
