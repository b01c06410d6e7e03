import json
import re
from textwrap import dedent

import pytest

from mibtree.config import ParserConfig
from mibtree.errors import DependencyError, IntegrityError
from mibtree.export import nodes_to_json, tree_to_json
from mibtree.pipeline import build_json_tree, parse_directory, parse_lines

from conftest import ACME_MIB, BASE_MIB, lines_of


OID_RE = re.compile(r"^\d+(\.\d+)*$")


def test_missing_import_fails_with_module_name():
	with pytest.raises(DependencyError) as exc:
		parse_lines(lines_of(ACME_MIB))
	assert exc.value.missing == ["BASE-MIB.mib"]


def test_dependency_check_runs_before_symbol_extraction():
	broken = ACME_MIB.replace("::= { acmeWidgets 2 }", "")
	with pytest.raises(DependencyError):
		parse_lines(lines_of(broken), ParserConfig(strict=True))


def test_supplying_the_module_succeeds():
	result = parse_lines(lines_of(ACME_MIB, BASE_MIB))
	oids = {n.name: n.oid for n in result.nodes}
	assert oids == {
		"acme": "1.1",
		"acmeWidgets": "1.1.2",
		"widgetCount": "1.1.2.1",
		"widgetName": "1.1.2.2",
		"base": "1.3",
	}
	assert result.modules == ["ACME-MIB", "BASE-MIB"]
	assert [r.name for r in result.tree] == ["acme", "base"]


def test_preloaded_module_satisfies_import():
	result = parse_lines(lines_of(ACME_MIB), ParserConfig(preloaded_modules=["BASE-MIB"]))
	assert len(result.nodes) == 4


def test_every_oid_is_numeric_and_rooted():
	extra = dedent(
		"""
		orphan OBJECT IDENTIFIER ::= { unknownParent 7 }
		internet OBJECT IDENTIFIER ::= { iso org(3) dod(6) 1 }
		"""
	)
	result = parse_lines(lines_of(ACME_MIB, BASE_MIB, extra))
	for n in result.nodes:
		assert OID_RE.match(n.oid), n.oid
		assert n.oid.split(".")[0] == "1"
	assert {n.name: n.oid for n in result.nodes}["orphan"] == "1.7"


def test_cycle_fails():
	lines = ["p OBJECT IDENTIFIER ::= { q 1 }", "q OBJECT IDENTIFIER ::= { p 2 }"]
	with pytest.raises(IntegrityError):
		parse_lines(lines)


def test_idempotent_output():
	lines = lines_of(ACME_MIB, BASE_MIB)
	first = parse_lines(lines)
	second = parse_lines(lines)
	assert nodes_to_json(first.nodes) == nodes_to_json(second.nodes)
	assert tree_to_json(first.tree) == tree_to_json(second.tree)


def test_warnings_are_reported():
	lines = lines_of(BASE_MIB, "dangling OBJECT-TYPE\nSYNTAX Integer32\n")
	result = parse_lines(lines)
	assert len(result.warnings) == 1


def test_parse_directory(mib_dir):
	result = parse_directory(ParserConfig(path=str(mib_dir)))
	assert [n.name for n in result.nodes][:2] == ["acme", "acmeWidgets"]


def test_build_json_tree_writes_both_files(mib_dir):
	tree_json = build_json_tree(ParserConfig(path=str(mib_dir)))
	flat_file = mib_dir.parent / "mibs.json"
	tree_file = mib_dir.parent / "mibs-tree.json"
	assert tree_file.read_text() == tree_json
	flat = json.loads(flat_file.read_text())
	assert len(flat) == 5
	assert json.loads(tree_json)[0]["children"][0]["name"] == "acmeWidgets"
