from __future__ import annotations

import logging
from typing import Iterable, List, Set

from .errors import DependencyError


logger = logging.getLogger(__name__)


def find_missing_modules(
	required: Iterable[str],
	defined: Iterable[str],
	suffix: str = ".mib",
	preloaded: Iterable[str] = (),
) -> List[str]:
	"""Return required modules no defined module satisfies, first-seen order, no repeats.

	Both sides are compared as file names, i.e. with ``suffix`` appended.
	"""
	available: Set[str] = {name + suffix for name in defined}
	available.update(name + suffix for name in preloaded)
	missing: List[str] = []
	seen: Set[str] = set()
	for name in required:
		file_name = name + suffix
		if file_name in available or file_name in seen:
			continue
		seen.add(file_name)
		missing.append(file_name)
	return missing


def check_dependencies(
	required: Iterable[str],
	defined: Iterable[str],
	suffix: str = ".mib",
	preloaded: Iterable[str] = (),
) -> None:
	missing = find_missing_modules(required, defined, suffix=suffix, preloaded=preloaded)
	if missing:
		logger.error("unresolved imports: %s", ", ".join(missing))
		raise DependencyError(missing)
	logger.debug("all imported modules are defined")
