"""
Command line entry point.

    tuplegen OUTPUT_DIR [--max-arity N] [--config FILE] [--formatter {black,plain}]
             [--line-length N] [--dump-model] [--log-level LEVEL]
             [--log-file FILE]

Flags override values read from ``--config``.
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .backends import Formatter
from .builder import build
from .config import DEFAULT_MAX_ARITY, GeneratorConfig, apply_overrides, load_config
from .errors import TupleGenError
from .logging import get_logger, setup_logging
from .pipeline import generate
from .serialization import family_to_yaml

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuplegen",
        description="Generate a family of fixed-arity, immutable tuple types as Python source",
    )
    parser.add_argument("output_dir", nargs="?", help="Directory receiving the generated modules")
    parser.add_argument(
        "--max-arity",
        type=int,
        help=f"Largest arity with a statically typed member (default {DEFAULT_MAX_ARITY})",
    )
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument(
        "--formatter",
        choices=[f.value for f in Formatter],
        help="Formatting applied to the generated source",
    )
    parser.add_argument("--line-length", type=int, help="Line length passed to the formatter (default unbounded)")
    parser.add_argument("--dump-model", action="store_true", help="Print the family model as YAML and exit")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--log-file", help="Also append log records to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_config(args.config) if args.config else GeneratorConfig()
    return apply_overrides(
        config,
        output_dir=args.output_dir,
        max_arity=args.max_arity,
        formatter=Formatter(args.formatter) if args.formatter else None,
        line_length=args.line_length,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level, args.log_file)
    except OSError as e:
        parser.error(f"cannot open log file: {e}")

    try:
        config = resolve_config(args)
        if args.dump_model:
            sys.stdout.write(family_to_yaml(build(config.max_arity)))
            return 0
        if args.output_dir is None and not args.config:
            parser.error("output_dir is required unless --config or --dump-model is given")
        result = generate(config)
    except TupleGenError as e:
        logger.error("%s", e)
        return 1

    print(f"Wrote {result.interfaces_path}")
    print(f"Wrote {result.implementations_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
