from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from enumgen.config import config_from_args, load_config_file
from enumgen.errors import EnumGenError, ErrorPolicy
from enumgen.pipeline import process, traverse_dir


logger = logging.getLogger("enumgen")

LOG_ENV = "ENUMGEN_LOG"


def _log_level(verbose: bool) -> int:
	if verbose:
		return logging.DEBUG
	name = os.environ.get(LOG_ENV, "WARNING").upper()
	level = logging.getLevelName(name)
	if not isinstance(level, int):
		print(f"enumgen: ignoring unknown {LOG_ENV} level {name!r}", file=sys.stderr)
		return logging.WARNING
	return level


def _configure_logging(verbose: bool) -> None:
	logging.basicConfig(level=_log_level(verbose), format="%(levelname)s %(name)s: %(message)s")


def _policy(args: argparse.Namespace) -> ErrorPolicy:
	return ErrorPolicy.COLLECT if args.keep_going else ErrorPolicy.FAIL_FAST


def cmd_generate(args: argparse.Namespace) -> None:
	if args.config:
		config = load_config_file(args.config)
	else:
		config = config_from_args(args)
	result = process(args.input, args.output, config, policy=_policy(args))
	for err in result.diagnostics:
		print(f"line {err.line}: {err.message}", file=sys.stderr)


def cmd_batch(args: argparse.Namespace) -> None:
	traverse_dir(args.input_dir, args.output_dir, policy=_policy(args))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="enumgen",
		description="A simple program for generating rust enums and associated traits from text files.",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pg = sub.add_parser("generate", help="Generate one enum from a file or stdin")
	pg.add_argument("-i", "--input", help="input file name (stdin if not specified)")
	pg.add_argument("-o", "--output", help="output file name (stdout if not specified)")
	pg.add_argument("--config", help="read options from a TOML file with a [rust-enum-derive] table")
	pg.add_argument("--name", help="the enum name (Name if not specified)")
	pg.add_argument("--derive", help='Which traits to derive. Ex: "Debug, PartialEq"')
	pg.add_argument("--define", action="store_true", help="parse C #define input instead of enum")
	pg.add_argument(
		"-a", "--all", action="store_true",
		help="implement all of the traits (--default --display --fromprimative --fromstr --pretty_fmt)",
	)
	pg.add_argument("--default", action="store_true", help="implement the Default trait with the first value")
	pg.add_argument("--display", action="store_true", help="implement the std::fmt::Display trait")
	pg.add_argument("--fromprimative", action="store_true", help="implement the num::traits::FromPrimitive trait")
	pg.add_argument("--fromstr", action="store_true", help="implement the std::str::FromStr trait")
	pg.add_argument("--hex", action="store_true", help="hexadecimal output")
	pg.add_argument("--pretty_fmt", action="store_true", help="implement pretty_fmt()")
	pg.add_argument(
		"--no-check-bitflags", dest="check_bitflags", action="store_false",
		help="skip the single-bit check on the largest value for --pretty_fmt",
	)
	pg.add_argument("--keep-going", action="store_true", help="skip malformed lines instead of failing")
	pg.set_defaults(func=cmd_generate)

	pb = sub.add_parser("batch", help="Generate every <stem>.toml/<stem>.in pair under a directory")
	pb.add_argument("input_dir", help="input directory to traverse")
	pb.add_argument("output_dir", help="output directory mirroring input_dir")
	pb.add_argument("--keep-going", action="store_true", help="skip malformed lines instead of failing")
	pb.set_defaults(func=cmd_batch)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	_configure_logging(args.verbose)
	logger.debug("args = %r", args)
	try:
		args.func(args)
	except EnumGenError as e:
		print(f"enumgen: {e}", file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
