from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from .config import DEFAULT_CLAUSE_KEYWORDS
from .errors import MalformedClauseError
from .model import OIDNode, ScanResult


logger = logging.getLogger(__name__)

MODULE_RE = re.compile(r"([A-Za-z][\w-]*)\s+DEFINITIONS(?:\s+\w+\s+TAGS)?\s*::=\s*BEGIN")
IMPORT_RE = re.compile(r"\bFROM\s+([A-Za-z][\w-]*)")
OBJECT_IDENTIFIER_RE = re.compile(r"^(\S+)\s+OBJECT\s+IDENTIFIER\s*(?:::=\s*\{([^}]*)\})?$")
ASSIGNMENT_RE = re.compile(r"^::=\s*\{([^}]*)\}")
INLINE_ASSIGNMENT_RE = re.compile(r"::=\s*\{([^}]*)\}")
BRACES_RE = re.compile(r"^\{([^}]*)\}")
TYPE_ASSIGNMENT_RE = re.compile(r"^([A-Za-z][\w-]*)\s*::=")
NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
ARC_RE = re.compile(r"^(?:[A-Za-z][\w-]*\()?(\d+)\)?$")
NAMED_ARC_RE = re.compile(r"\(\d+\)$")

DESCRIPTION_KEYWORD = "DESCRIPTION"

# Every SMI macro that opens a definition, whether or not it yields a symbol.
SMI_MACROS = (
	"AGENT-CAPABILITIES", "MODULE-COMPLIANCE", "MODULE-IDENTITY", "NOTIFICATION-GROUP",
	"NOTIFICATION-TYPE", "OBJECT-GROUP", "OBJECT-IDENTITY", "OBJECT-TYPE",
	"TEXTUAL-CONVENTION", "TRAP-TYPE",
)
DEFINITION_RE = re.compile(
	r"^([A-Za-z][\w-]*)\s+(?:OBJECT\s+IDENTIFIER|"
	+ "|".join(re.escape(k) for k in SMI_MACROS)
	+ r")(?:\s|$)"
)

# Words that show up in first position of SMI statements without naming a symbol.
RESERVED_WORDS = frozenset({
	"ACCESS", "AGENT-CAPABILITIES", "AUGMENTS", "BEGIN", "DEFINITIONS", "DEFVAL",
	"DESCRIPTION", "END", "ENTERPRISE", "EXPORTS", "FROM", "IDENTIFIER", "IMPORTS",
	"INDEX", "INTEGER", "MACRO", "MAX-ACCESS", "MODULE-COMPLIANCE", "MODULE-IDENTITY",
	"NOTATION", "NOTIFICATION-GROUP", "NOTIFICATION-TYPE", "OBJECT", "OBJECT-GROUP",
	"OBJECT-IDENTITY", "OBJECT-TYPE", "OBJECTS", "OCTET", "REFERENCE", "SEQUENCE",
	"STATUS", "STRING", "SYNTAX", "TEXTUAL-CONVENTION", "TRAP-TYPE", "TYPE", "UNITS",
	"VALUE", "VARIABLES",
})


def _mask_line(line: str, in_string: bool) -> Tuple[str, bool]:
	"""Blank out quoted text and ``--`` comments, keeping statement keywords.

	Returns the masked line and whether a quoted string is still open at its end.
	"""
	out: List[str] = []
	i = 0
	n = len(line)
	while i < n:
		ch = line[i]
		if in_string:
			if ch == '"':
				in_string = False
			i += 1
			continue
		if ch == '"':
			in_string = True
			out.append(" ")
			i += 1
			continue
		if line.startswith("--", i):
			end = line.find("--", i + 2)
			if end == -1:
				break
			out.append(" ")
			i = end + 2
			continue
		out.append(ch)
		i += 1
	return "".join(out).strip(), in_string


def _prepare(lines: Iterable[str]) -> Tuple[List[str], List[str]]:
	raw = [line.strip() for line in lines]
	code: List[str] = []
	in_string = False
	for line in raw:
		masked, in_string = _mask_line(line, in_string)
		code.append(masked)
	return raw, code


def _is_symbol_name(token: str) -> bool:
	return bool(NAME_RE.match(token)) and token not in RESERVED_WORDS


def _clause_re(keywords: Sequence[str]) -> Pattern[str]:
	alternatives = "|".join(re.escape(k) for k in keywords)
	return re.compile(rf"^([A-Za-z][\w-]*)\s+({alternatives})(?:\s|$)")


def _starts_definition(line: str, opener: Pattern[str]) -> bool:
	"""True for a line opening any named definition, including type assignments."""
	for pattern in (opener, DEFINITION_RE, TYPE_ASSIGNMENT_RE):
		m = pattern.match(line)
		if m and _is_symbol_name(m.group(1)):
			return True
	return False


def _next_code_index(code: Sequence[str], start: int) -> Optional[int]:
	for j in range(start, len(code)):
		if code[j]:
			return j
	return None


def _assignment_at(code: Sequence[str], j: int) -> Optional[Tuple[str, int]]:
	"""Match ``::= { ... }`` at code[j], also when ``::=`` and the braces sit on separate lines.

	Returns the brace body and the index of the line holding the closing brace.
	"""
	m = ASSIGNMENT_RE.match(code[j])
	if m:
		return m.group(1), j
	if code[j] != "::=":
		return None
	k = _next_code_index(code, j + 1)
	if k is None:
		return None
	m = BRACES_RE.match(code[k])
	if m:
		return m.group(1), k
	return None


def parse_assignment(body: str) -> Optional[Tuple[str, str]]:
	"""Split ``PARENT ARC [ARC...]`` into the parent name and dotted local arcs.

	``name(n)`` arcs contribute ``n``. Returns None when the body is unusable.
	"""
	tokens = body.split()
	if len(tokens) < 2:
		return None
	parent = NAMED_ARC_RE.sub("", tokens[0])
	arcs: List[str] = []
	for token in tokens[1:]:
		m = ARC_RE.match(token)
		if not m:
			return None
		arcs.append(m.group(1))
	return parent, ".".join(arcs)


def scan_imports(lines: Iterable[str]) -> Tuple[List[str], List[str]]:
	"""Collect (required, defined) module names in first-seen order, duplicates kept."""
	_, code = _prepare(lines)
	required: List[str] = []
	defined: List[str] = []
	for line in code:
		if not line:
			continue
		m = MODULE_RE.search(line)
		if m:
			defined.append(m.group(1))
		required.extend(IMPORT_RE.findall(line))
	return required, defined


def _read_description(raw: Sequence[str], start: int, end: int) -> str:
	"""Join the DESCRIPTION clause spanning raw[start:end + 1] into one line of text, without quotes."""
	fragments = [line for line in raw[start:end + 1] if line]
	text = " ".join(fragments)
	text = text[text.find(DESCRIPTION_KEYWORD) + len(DESCRIPTION_KEYWORD):].strip()
	m = re.match(r'"(.*?)"', text, re.DOTALL)
	if m:
		return m.group(1).strip()
	return text.split("::=")[0].strip().strip('"').strip()


def _scan_clause(
	raw: Sequence[str],
	code: Sequence[str],
	start: int,
	opener: Pattern[str],
) -> Tuple[Optional[str], str]:
	"""Look ahead from a clause opener for its ``::= { ... }`` line.

	The clause ends at the first assignment, at ``END`` or at the next definition.
	Returns the assignment body (None when the clause has no usable one of its
	own) and its description.
	"""
	description_at: Optional[int] = None
	j = start + 1
	while j < len(code):
		line = code[j]
		found = _assignment_at(code, j)
		if found:
			body, end = found
			description = ""
			if description_at is not None:
				description = _read_description(raw, description_at, end)
			return body, description
		if line.startswith("::=") or line == "END" or _starts_definition(line, opener):
			break
		if description_at is None and line.startswith(DESCRIPTION_KEYWORD):
			description_at = j
		j += 1
	return None, ""


def scan_symbols(
	lines: Iterable[str],
	clause_keywords: Sequence[str] = DEFAULT_CLAUSE_KEYWORDS,
	strict: bool = False,
) -> ScanResult:
	raw, code = _prepare(lines)
	opener = _clause_re(clause_keywords)
	skip_module_identity = "MODULE-IDENTITY" not in clause_keywords
	result = ScanResult()
	current_module = ""

	def malformed(name: str, index: int, reason: str) -> None:
		if strict:
			raise MalformedClauseError(name, index + 1, reason)
		message = f"skipped {name} at line {index + 1}: {reason}"
		logger.warning(message)
		result.warnings.append(message)

	def emit(name: str, body: str, description: str, index: int) -> None:
		parsed = parse_assignment(body)
		if parsed is None:
			malformed(name, index, f"unusable assignment {{{body.strip()}}}")
			return
		parent, arc = parsed
		result.symbols.append(OIDNode(name=name, id=arc, parent=parent, description=description))
		result.module_members.setdefault(current_module, []).append(name)

	for i, line in enumerate(code):
		if not line:
			continue
		m = MODULE_RE.search(line)
		if m:
			current_module = m.group(1)
			continue

		m = OBJECT_IDENTIFIER_RE.match(line)
		if m:
			name, body = m.group(1), m.group(2)
			if not _is_symbol_name(name):
				continue
			if body is None:
				# Assignment on its own line right after the declaration.
				k = _next_code_index(code, i + 1)
				found = _assignment_at(code, k) if k is not None else None
				if not found:
					continue
				body = found[0]
			emit(name, body, "", i)
			continue

		m = opener.match(line)
		if not m:
			continue
		if skip_module_identity and "MODULE-IDENTITY" in line:
			continue
		if "MACRO" in line:
			continue
		name = m.group(1)
		if not _is_symbol_name(name):
			logger.debug("discarding degenerate clause name %r at line %d", name, i + 1)
			continue
		inline = INLINE_ASSIGNMENT_RE.search(line)
		if inline:
			emit(name, inline.group(1), "", i)
			continue
		body, description = _scan_clause(raw, code, i, opener)
		if body is None:
			malformed(name, i, "missing ::= assignment")
			continue
		emit(name, body, description, i)

	logger.debug("scanned %d lines, %d symbols", len(code), len(result.symbols))
	return result


def scan_lines(
	lines: Iterable[str],
	clause_keywords: Sequence[str] = DEFAULT_CLAUSE_KEYWORDS,
	strict: bool = False,
) -> ScanResult:
	lines = list(lines)
	required, defined = scan_imports(lines)
	result = scan_symbols(lines, clause_keywords=clause_keywords, strict=strict)
	result.required_modules = required
	result.defined_modules = defined
	return result
