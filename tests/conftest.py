from textwrap import dedent

import pytest


ACME_MIB = dedent(
	"""
	ACME-MIB DEFINITIONS ::= BEGIN

	IMPORTS
		OBJECT-TYPE, Integer32 FROM BASE-MIB;

	acme OBJECT IDENTIFIER ::= { iso 1 }
	acmeWidgets OBJECT IDENTIFIER ::= { acme 2 }

	widgetCount OBJECT-TYPE
		SYNTAX      Integer32
		MAX-ACCESS  read-only
		STATUS      current
		DESCRIPTION
			"The number of widgets
			currently attached to
			this agent."
		::= { acmeWidgets 1 }

	widgetName OBJECT-TYPE
		SYNTAX      OCTET STRING
		MAX-ACCESS  read-only
		STATUS      current
		DESCRIPTION "Name of the widget."
		::= { acmeWidgets 2 }

	END
	"""
)

BASE_MIB = dedent(
	"""
	BASE-MIB DEFINITIONS ::= BEGIN

	base OBJECT IDENTIFIER ::= { iso 3 }

	END
	"""
)


def lines_of(*texts: str):
	lines = []
	for text in texts:
		lines.extend(text.splitlines())
	return lines


@pytest.fixture
def mib_dir(tmp_path):
	root = tmp_path / "mibs"
	root.mkdir()
	(root / "ACME-MIB.mib").write_text(ACME_MIB)
	(root / "BASE-MIB.mib").write_text(BASE_MIB)
	return root
