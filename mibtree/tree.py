from __future__ import annotations

import logging
from typing import Collection, Dict, Iterable, List

from .config import OrphanPolicy
from .errors import UnresolvedParentError
from .model import OIDNode


logger = logging.getLogger(__name__)

# Not a valid symbol name, so it never collides with a scanned symbol.
ORPHANS_ROOT = "<orphans>"


def _orphans_node() -> OIDNode:
	"""Holder for unreachable symbols. It is not a symbol and carries no id or OID."""
	return OIDNode(
		name=ORPHANS_ROOT,
		id="",
		parent="",
		description="Symbols whose parent is neither a root nor a known symbol",
	)


def find_orphans(symbols: Iterable[OIDNode], root_names: Collection[str] = ("iso",)) -> List[str]:
	symbols = list(symbols)
	known = {node.name for node in symbols}
	return [
		node.name for node in symbols
		if node.parent not in root_names and node.parent not in known
	]


def assemble_tree(
	symbols: Iterable[OIDNode],
	root_names: Collection[str] = ("iso",),
	orphan_policy: OrphanPolicy = "drop",
) -> List[OIDNode]:
	"""Build the forest for an OID-resolved flat table.

	Input nodes are left untouched; every tree node is a copy with its own
	``children`` list. Children keep scan order.
	"""
	nodes = [node.model_copy(update={"children": []}) for node in symbols]
	by_name: Dict[str, OIDNode] = {node.name: node for node in nodes}
	roots: List[OIDNode] = []
	orphans: List[OIDNode] = []

	for node in nodes:
		if node.parent in root_names:
			roots.append(node)
		elif node.parent in by_name:
			by_name[node.parent].children.append(node)
		elif orphan_policy == "error":
			raise UnresolvedParentError(node.name, node.parent)
		else:
			orphans.append(node)

	if orphans:
		if orphan_policy == "attach":
			holder = _orphans_node()
			holder.children.extend(orphans)
			roots.append(holder)
		else:
			logger.warning(
				"%d symbols are unreachable from any root and left out of the tree: %s",
				len(orphans), ", ".join(node.name for node in orphans),
			)
	return roots


def flatten_tree(roots: Iterable[OIDNode]) -> List[OIDNode]:
	"""Depth-first, pre-order walk of a forest; returned nodes have no children.

	The synthetic orphans holder is left out, its children are not.
	"""
	flat: List[OIDNode] = []
	for node in roots:
		if node.name != ORPHANS_ROOT:
			flat.append(node.model_copy(update={"children": []}))
		flat.extend(flatten_tree(node.children))
	return flat
