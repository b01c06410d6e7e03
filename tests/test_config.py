import os

import pytest
from pydantic import ValidationError

from mibtree.config import ParserConfig


def test_defaults():
	config = ParserConfig()
	assert config.module_suffix == ".mib"
	assert config.root_names == {"iso": "1"}
	assert config.clause_keywords == ["OBJECT-TYPE", "OBJECT-IDENTITY"]
	assert config.orphan_policy == "drop"


def test_output_paths_strip_trailing_separator():
	flat, tree = ParserConfig(path=os.path.join("data", "mibs") + os.sep).output_paths()
	assert flat == os.path.join("data", "mibs") + ".json"
	assert tree == os.path.join("data", "mibs") + "-tree.json"


def test_non_numeric_arcs_rejected():
	with pytest.raises(ValidationError):
		ParserConfig(root_arc="x")
	with pytest.raises(ValidationError):
		ParserConfig(root_names={"iso": "one"})


def test_unknown_orphan_policy_rejected():
	with pytest.raises(ValidationError):
		ParserConfig(orphan_policy="ignore")
