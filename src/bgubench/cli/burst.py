"""Burst camera pipeline benchmark command.

Usage: bgubench-burst [--config PATH] [output]
"""

import sys

from bgubench.cli import HarnessArgumentParser, UsageError, add_common_arguments, configure_logging
from bgubench.config.settings import load_harness_config
from bgubench.driver import EXIT_SUCCESS, EXIT_USAGE, run_burst_harness


def build_parser() -> HarnessArgumentParser:
    parser = HarnessArgumentParser(
        prog="bgubench-burst",
        description="Benchmark every configured burst camera pipeline operator "
        "on seeded synthetic raw frames.",
    )
    parser.add_argument("output", nargs="?", default=None, help="Where to write the output image")
    add_common_arguments(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the burst camera pipeline benchmark CLI."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        print(parser.format_usage(), end="")
        return EXIT_USAGE

    config = load_harness_config(args.config)
    configure_logging(config.logging.level)

    run_burst_harness(args.output, config=config)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
