from __future__ import annotations

import logging
from typing import Iterable, Optional

from .config import ParserConfig
from .deps import check_dependencies
from .export import nodes_to_json, save_json, tree_to_json
from .fs_scan import read_mib_lines, scan_mib_directory
from .model import ParseResult
from .resolve import resolve_oids
from .scan import scan_imports, scan_symbols
from .tree import assemble_tree


logger = logging.getLogger(__name__)


def parse_lines(lines: Iterable[str], config: Optional[ParserConfig] = None) -> ParseResult:
	"""Run scan, dependency check, OID resolution and tree assembly over merged MIB lines.

	Imports are checked before any symbol is extracted, so a DependencyError
	leaves nothing behind.
	"""
	config = config or ParserConfig()
	lines = list(lines)

	required, defined = scan_imports(lines)
	check_dependencies(
		required,
		defined,
		suffix=config.module_suffix,
		preloaded=config.preloaded_modules,
	)

	scanned = scan_symbols(lines, clause_keywords=config.clause_keywords, strict=config.strict)
	nodes = resolve_oids(
		scanned.symbols,
		root_arc=config.root_arc,
		root_names=config.root_names,
		allow_duplicates=config.allow_duplicates,
	)
	tree = assemble_tree(nodes, root_names=config.root_names, orphan_policy=config.orphan_policy)

	modules = list(dict.fromkeys(defined))
	logger.info("parsed %d symbols from %d modules", len(nodes), len(modules))
	return ParseResult(
		nodes=nodes,
		tree=tree,
		modules=modules,
		warnings=scanned.warnings,
		module_members=scanned.module_members,
	)


def parse_directory(config: ParserConfig) -> ParseResult:
	files = scan_mib_directory(config.path)
	logger.info("reading %d files from %s", len(files), config.path)
	return parse_lines(read_mib_lines(files), config)


def write_outputs(result: ParseResult, config: ParserConfig) -> str:
	"""Write the flat and tree JSON files derived from ``config.path``; return the tree JSON."""
	flat_path, tree_path = config.output_paths()
	save_json(nodes_to_json(result.nodes), flat_path)
	tree_json = tree_to_json(result.tree)
	save_json(tree_json, tree_path)
	return tree_json


def build_json_tree(config: ParserConfig) -> str:
	return write_outputs(parse_directory(config), config)
