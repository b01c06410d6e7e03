from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set

from .config import DEFAULT_ROOT_NAMES
from .errors import DuplicateNameError, IntegrityError
from .model import OIDNode


logger = logging.getLogger(__name__)


class SymbolTable:
	"""Symbols in scan order, addressed by a stable integer id, plus a name index.

	A repeated name raises DuplicateNameError. With ``allow_duplicates`` the
	later symbol takes over the name and the earlier one stays reachable by id only.
	"""

	def __init__(self, allow_duplicates: bool = False) -> None:
		self.allow_duplicates = allow_duplicates
		self._symbols: List[OIDNode] = []
		self._by_name: Dict[str, int] = {}

	def add(self, node: OIDNode) -> int:
		symbol_id = len(self._symbols)
		previous = self._by_name.get(node.name)
		if previous is not None:
			if not self.allow_duplicates:
				raise DuplicateNameError(node.name, previous)
			logger.warning(
				"symbol %s redefined (entry %d replaces entry %d in lookups)",
				node.name, symbol_id, previous,
			)
		self._symbols.append(node)
		self._by_name[node.name] = symbol_id
		return symbol_id

	def get(self, name: str) -> Optional[OIDNode]:
		symbol_id = self._by_name.get(name)
		if symbol_id is None:
			return None
		return self._symbols[symbol_id]

	def by_id(self, symbol_id: int) -> OIDNode:
		return self._symbols[symbol_id]

	def __contains__(self, name: object) -> bool:
		return name in self._by_name

	def __iter__(self) -> Iterator[OIDNode]:
		return iter(self._symbols)

	def __len__(self) -> int:
		return len(self._symbols)

	@classmethod
	def from_symbols(cls, symbols: Iterable[OIDNode], allow_duplicates: bool = False) -> "SymbolTable":
		table = cls(allow_duplicates=allow_duplicates)
		for node in symbols:
			table.add(node)
		return table


def compute_oid(
	node: OIDNode,
	table: SymbolTable,
	root_arc: str = "1",
	root_names: Mapping[str, str] = DEFAULT_ROOT_NAMES,
) -> str:
	parts: List[str] = [node.id]
	visited: Set[str] = {node.name}
	chain: List[str] = [node.name]
	parent = node.parent
	while parent:
		ancestor = table.get(parent)
		if ancestor is None:
			break
		chain.append(parent)
		if parent in visited:
			raise IntegrityError(chain)
		visited.add(parent)
		parts.insert(0, ancestor.id)
		parent = ancestor.parent
	prefix = root_names.get(parent, root_arc)
	return ".".join([prefix] + parts)


def resolve_oids(
	symbols: Iterable[OIDNode],
	root_arc: str = "1",
	root_names: Mapping[str, str] = DEFAULT_ROOT_NAMES,
	allow_duplicates: bool = False,
) -> List[OIDNode]:
	"""Return copies of ``symbols`` with ``oid`` filled in, in the same order."""
	table = SymbolTable.from_symbols(symbols, allow_duplicates=allow_duplicates)
	resolved: List[OIDNode] = []
	for node in table:
		oid = compute_oid(node, table, root_arc=root_arc, root_names=root_names)
		resolved.append(node.model_copy(update={"oid": oid}))
	logger.debug("resolved %d OIDs", len(resolved))
	return resolved
