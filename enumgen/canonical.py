from __future__ import annotations

import logging
from typing import Iterable

from .errors import EmptyTable
from .model import Symbol, SymbolTable


logger = logging.getLogger(__name__)


def canonicalize(symbols: Iterable[Symbol], *, source: str = "<input>") -> SymbolTable:
	"""Sort ascending by value; equal values keep their extraction order."""
	ordered = sorted(symbols, key=lambda s: s.value)
	if not ordered:
		raise EmptyTable(f"couldn't parse any input from {source}.")
	table = SymbolTable(symbols=tuple(ordered))
	for value, names in table.duplicate_values().items():
		logger.warning("%s: value %d is shared by %s", source, value, ", ".join(names))
	return table
