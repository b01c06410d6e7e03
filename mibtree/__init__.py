"""Turn MIB module sources into a JSON tree of OID definitions.

Modules:
- fs_scan.py: Directory listing and line reading of MIB source files.
- scan.py: Line scanner for symbols, imports and module definitions.
- deps.py: Check that every imported module is supplied.
- resolve.py: Symbol table and dotted-decimal OID resolution.
- tree.py: Flat table to rooted forest, and back.
- export.py: JSON serialization of the flat table and the tree.
- pipeline.py: The stages wired together.
- summarize.py: Short textual summary of a parse.
"""

__all__ = [
	"config",
	"deps",
	"errors",
	"export",
	"fs_scan",
	"model",
	"pipeline",
	"resolve",
	"scan",
	"summarize",
	"tree",
]
