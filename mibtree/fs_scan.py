from __future__ import annotations

import logging
import os
from typing import Iterable, List

from .errors import FileAccessError
from .model import MibFile


logger = logging.getLogger(__name__)


def scan_mib_directory(root: str) -> List[MibFile]:
	"""List the regular, non-hidden files of ``root`` in name order.

	Sub-directories are not descended into.
	"""
	try:
		entries = sorted(os.listdir(root))
	except OSError as e:
		raise FileAccessError(root, e.strerror or str(e)) from e

	files: List[MibFile] = []
	for name in entries:
		if name.startswith("."):
			continue
		path = os.path.join(root, name)
		if not os.path.isfile(path):
			logger.debug("skipping non-file entry %s", path)
			continue
		files.append(MibFile(path=path, name=name))
	return files


def read_lines(path: str) -> List[str]:
	with open(path, "r", encoding="utf-8", errors="replace") as fh:
		return fh.read().splitlines()


def read_mib_lines(files: Iterable[MibFile]) -> List[str]:
	"""Concatenate the lines of every file; unreadable files are logged and skipped."""
	merged: List[str] = []
	for f in files:
		try:
			lines = read_lines(f.path)
		except OSError as e:
			logger.warning("error reading MIB file %s: %s", f.path, e)
			continue
		logger.debug("read %d lines from %s", len(lines), f.name)
		merged.extend(lines)
	return merged
