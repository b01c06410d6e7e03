from __future__ import annotations

from typing import Dict, List

from .model import ParseResult, Summary
from .tree import ORPHANS_ROOT, flatten_tree


def summarize_module(module: str, members: List[str]) -> str:
	label = module or "(outside any module)"
	parts: List[str] = [f"Module {label}: {len(members)} symbols"]
	if members:
		parts.append(f"  First: {', '.join(members[:10])}")
	return "\n".join(parts)


def summarize_result(result: ParseResult) -> Summary:
	per_module: Dict[str, str] = {}
	for module, members in result.module_members.items():
		per_module[module] = summarize_module(module, members)

	in_tree = len(flatten_tree(result.tree))
	top_level = [node for node in result.tree if node.name != ORPHANS_ROOT]
	global_overview = (
		f"{len(result.modules)} modules, {len(result.nodes)} symbols, "
		f"{len(top_level)} top-level arcs, "
		f"{max(len(result.nodes) - in_tree, 0)} symbols outside the tree, "
		f"{len(result.warnings)} warnings"
	)
	return Summary(global_overview=global_overview, per_module=per_module)
