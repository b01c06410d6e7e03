from __future__ import annotations

from typing import List, Optional, Sequence


class MibTreeError(Exception):
	"""Base class for every error raised while turning MIB text into an OID tree."""


class FileAccessError(MibTreeError):
	def __init__(self, path: str, reason: str) -> None:
		self.path = path
		self.reason = reason
		super().__init__(f"cannot access {path}: {reason}")


class DependencyError(MibTreeError):
	"""Imported modules that no supplied source file defines."""

	def __init__(self, missing: Sequence[str]) -> None:
		self.missing: List[str] = list(missing)
		super().__init__(f"required modules not found: {', '.join(self.missing)}")


class IntegrityError(MibTreeError):
	"""A parent chain loops back on itself."""

	def __init__(self, cycle: Sequence[str]) -> None:
		self.cycle: List[str] = list(cycle)
		super().__init__(f"parent cycle detected: {' -> '.join(self.cycle)}")


class MalformedClauseError(MibTreeError):
	def __init__(self, name: str, line: int, reason: str = "missing ::= assignment") -> None:
		self.name = name
		self.line = line
		self.reason = reason
		super().__init__(f"malformed definition of {name} at line {line}: {reason}")


class DuplicateNameError(MibTreeError):
	def __init__(self, name: str, first_id: Optional[int] = None) -> None:
		self.name = name
		self.first_id = first_id
		super().__init__(f"symbol {name} is defined more than once")


class UnresolvedParentError(MibTreeError):
	def __init__(self, name: str, parent: str) -> None:
		self.name = name
		self.parent = parent
		super().__init__(f"parent {parent} of {name} is neither a root nor a known symbol")
