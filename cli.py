from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

import uvicorn

from mibtree.config import DEFAULT_ROOT_NAMES, ParserConfig
from mibtree.errors import FileAccessError, MibTreeError
from mibtree.pipeline import parse_directory, write_outputs
from mibtree.summarize import summarize_result


logger = logging.getLogger("mibtree")


def _parse_roots(values: Optional[List[str]]) -> Dict[str, str]:
	if not values:
		return dict(DEFAULT_ROOT_NAMES)
	roots: Dict[str, str] = {}
	for value in values:
		name, sep, arc = value.partition("=")
		if not sep or not name or not arc:
			raise argparse.ArgumentTypeError(f"expected NAME=ARC, got {value!r}")
		roots[name] = arc
	return roots


def config_from_args(args: argparse.Namespace) -> ParserConfig:
	return ParserConfig(
		path=args.path,
		module_suffix=args.suffix,
		root_arc=args.root_arc,
		root_names=_parse_roots(args.root),
		preloaded_modules=args.assume or [],
		strict=args.strict,
		allow_duplicates=args.allow_duplicates,
		orphan_policy=args.orphans,
	)


def cmd_parse(args: argparse.Namespace) -> int:
	try:
		config = config_from_args(args)
	except (ValueError, argparse.ArgumentTypeError) as e:
		print(f"Error: {e}", file=sys.stderr)
		return 2

	try:
		result = parse_directory(config)
		tree_json = write_outputs(result, config)
	except FileAccessError as e:
		logger.error("%s", e)
		return 2
	except MibTreeError as e:
		logger.error("parsing operation has failed: %s", e)
		return 1

	if args.summary:
		summary = summarize_result(result)
		print(summary.global_overview)
		for text in summary.per_module.values():
			print(text)
	else:
		print(tree_json)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def _configure_logging(verbose: bool, quiet: bool) -> None:
	level = logging.INFO
	if verbose:
		level = logging.DEBUG
	elif quiet:
		level = logging.ERROR
	logging.basicConfig(level=level, format="%(levelname)s | %(name)s | %(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="mibtree")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
	parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pp = sub.add_parser("parse", help="Parse a directory of MIB files and write <path>.json and <path>-tree.json")
	pp.add_argument("path", help="Directory holding the MIB source files")
	pp.add_argument("--suffix", default=".mib", help="File suffix appended to module names (default: .mib)")
	pp.add_argument("--root-arc", default="1", help="Arc prefixed to paths that end at an unknown name")
	pp.add_argument("--root", action="append", metavar="NAME=ARC", help="Recognized root token (repeatable, default iso=1)")
	pp.add_argument("--assume", nargs="+", metavar="MODULE", help="Modules treated as present without a source file")
	pp.add_argument("--strict", action="store_true", help="Fail on clauses without a usable ::= assignment")
	pp.add_argument("--allow-duplicates", action="store_true", help="Let later definitions replace earlier ones")
	pp.add_argument("--orphans", choices=["drop", "error", "attach"], default="drop", help="Handling of symbols with unknown parents")
	pp.add_argument("--summary", action="store_true", help="Print a summary instead of the tree JSON")
	pp.set_defaults(func=cmd_parse)

	ps = sub.add_parser("serve", help="Run the HTTP API")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	_configure_logging(args.verbose, args.quiet)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
