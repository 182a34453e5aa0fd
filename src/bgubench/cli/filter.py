"""Guided upsampling benchmark command.

Usage: bgubench-filter [--config PATH] input [output]
"""

import logging
import sys

from bgubench.cli import HarnessArgumentParser, UsageError, add_common_arguments, configure_logging
from bgubench.config.settings import load_harness_config
from bgubench.driver import (
    EXIT_SUCCESS,
    EXIT_USAGE,
    EXIT_VALIDATION_FAILURE,
    run_filter_harness,
)
from bgubench.validation.golden import ValidationFailure

logger = logging.getLogger(__name__)


def build_parser() -> HarnessArgumentParser:
    parser = HarnessArgumentParser(
        prog="bgubench-filter",
        description="Validate the low-res effect pipeline against golden fixtures, "
        "then benchmark every configured guided upsampling operator.",
    )
    parser.add_argument("input", help="High-resolution input image")
    parser.add_argument("output", nargs="?", default=None, help="Where to write the output image")
    add_common_arguments(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the guided upsampling benchmark CLI."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        print(parser.format_usage(), end="")
        return EXIT_USAGE

    config = load_harness_config(args.config)
    configure_logging(config.logging.level)

    try:
        run_filter_harness(args.input, args.output, config=config)
    except ValidationFailure as e:
        logger.error("%s", e)
        return EXIT_VALIDATION_FAILURE

    print("Success!")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
