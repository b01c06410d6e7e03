from __future__ import annotations

from typing import Dict, List
from pydantic import BaseModel


class OIDNode(BaseModel):
	name: str
	oid: str = ""
	id: str
	parent: str
	description: str = ""
	children: List["OIDNode"] = []


class MibFile(BaseModel):
	path: str
	name: str


class ScanResult(BaseModel):
	symbols: List[OIDNode] = []
	required_modules: List[str] = []
	defined_modules: List[str] = []
	warnings: List[str] = []
	module_members: Dict[str, List[str]] = {}


class Summary(BaseModel):
	global_overview: str
	per_module: Dict[str, str]


class ParseResult(BaseModel):
	nodes: List[OIDNode]
	tree: List[OIDNode]
	modules: List[str] = []
	warnings: List[str] = []
	module_members: Dict[str, List[str]] = {}


OIDNode.model_rebuild()
