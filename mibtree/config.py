from __future__ import annotations

import os
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, field_validator


OrphanPolicy = Literal["drop", "error", "attach"]

DEFAULT_ROOT_NAMES: Dict[str, str] = {"iso": "1"}
DEFAULT_CLAUSE_KEYWORDS: List[str] = ["OBJECT-TYPE", "OBJECT-IDENTITY"]


class ParserConfig(BaseModel):
	"""Settings for one parse of a MIB source directory.

	``path`` is the only setting most callers need; output files are derived
	from it by appending ``flat_suffix`` and ``tree_suffix``.
	"""

	path: str = "."
	module_suffix: str = ".mib"
	root_arc: str = "1"
	root_names: Dict[str, str] = DEFAULT_ROOT_NAMES
	clause_keywords: List[str] = DEFAULT_CLAUSE_KEYWORDS
	preloaded_modules: List[str] = []
	strict: bool = False
	allow_duplicates: bool = False
	orphan_policy: OrphanPolicy = "drop"
	flat_suffix: str = ".json"
	tree_suffix: str = "-tree.json"

	@field_validator("root_arc")
	@classmethod
	def _numeric_arc(cls, value: str) -> str:
		if not value.isdigit():
			raise ValueError(f"root arc must be numeric, got {value!r}")
		return value

	@field_validator("root_names")
	@classmethod
	def _numeric_root_arcs(cls, value: Dict[str, str]) -> Dict[str, str]:
		for name, arc in value.items():
			if not arc.isdigit():
				raise ValueError(f"arc of root {name!r} must be numeric, got {arc!r}")
		return value

	def output_paths(self) -> Tuple[str, str]:
		base = self.path.rstrip("/\\") or self.path
		base = os.path.normpath(base)
		return base + self.flat_suffix, base + self.tree_suffix
