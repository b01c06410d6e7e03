from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List

from .errors import FileAccessError
from .model import OIDNode


logger = logging.getLogger(__name__)

FLAT_FIELDS = ("name", "oid", "id", "parent", "description")


def node_to_dict(node: OIDNode, with_children: bool = True) -> Dict[str, Any]:
	data: Dict[str, Any] = {key: getattr(node, key) for key in FLAT_FIELDS}
	if with_children and node.children:
		data["children"] = [node_to_dict(child) for child in node.children]
	return data


def nodes_to_json(nodes: Iterable[OIDNode], indent: int = 2) -> str:
	return json.dumps([node_to_dict(n, with_children=False) for n in nodes], indent=indent)


def tree_to_json(roots: Iterable[OIDNode], indent: int = 2) -> str:
	return json.dumps([node_to_dict(n) for n in roots], indent=indent)


def nodes_from_json(text: str) -> List[OIDNode]:
	return [OIDNode.model_validate(item) for item in json.loads(text)]


def save_json(text: str, path: str) -> None:
	try:
		with open(path, "w", encoding="utf-8") as fh:
			fh.write(text)
	except OSError as e:
		raise FileAccessError(path, e.strerror or str(e)) from e
	logger.info("wrote %s", path)
