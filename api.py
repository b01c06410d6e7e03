from __future__ import annotations

import os
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ValidationError

from mibtree.config import DEFAULT_ROOT_NAMES, OrphanPolicy, ParserConfig
from mibtree.errors import DependencyError, FileAccessError, IntegrityError, MibTreeError
from mibtree.model import OIDNode, Summary
from mibtree.pipeline import parse_directory
from mibtree.summarize import summarize_result


app = FastAPI(title="MIB OID Tree")


class ParseRequest(BaseModel):
	root_path: str
	strict: bool = False
	allow_duplicates: bool = False
	orphan_policy: OrphanPolicy = "drop"
	preloaded_modules: List[str] = []
	module_suffix: str = ".mib"
	root_arc: str = "1"
	root_names: Dict[str, str] = DEFAULT_ROOT_NAMES


class ParseResponse(BaseModel):
	nodes: List[OIDNode]
	tree: List[OIDNode]
	modules: List[str]
	warnings: List[str]
	summary: Summary


@app.post("/parse", response_model=ParseResponse)
def parse(req: ParseRequest) -> ParseResponse:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")

	try:
		config = ParserConfig(
			path=root,
			strict=req.strict,
			allow_duplicates=req.allow_duplicates,
			orphan_policy=req.orphan_policy,
			preloaded_modules=req.preloaded_modules,
			module_suffix=req.module_suffix,
			root_arc=req.root_arc,
			root_names=req.root_names,
		)
	except ValidationError as e:
		raise HTTPException(status_code=400, detail=str(e))
	try:
		result = parse_directory(config)
	except DependencyError as e:
		raise HTTPException(status_code=422, detail={"error": "dependency", "missing": e.missing})
	except IntegrityError as e:
		raise HTTPException(status_code=422, detail={"error": "integrity", "cycle": e.cycle})
	except FileAccessError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except MibTreeError as e:
		raise HTTPException(status_code=422, detail={"error": type(e).__name__, "message": str(e)})

	return ParseResponse(
		nodes=result.nodes,
		tree=result.tree,
		modules=result.modules,
		warnings=result.warnings,
		summary=summarize_result(result),
	)
