from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from .errors import ErrorPolicy, MalformedLiteral
from .literal import evaluate_literal, wrap_i32
from .model import LineError, Symbol


logger = logging.getLogger(__name__)


class Dialect(str, Enum):
	ENUM = "enum"
	DEFINE = "define"


# A value token is a bare word, optionally followed by "<< word".
_RE_ENUM_ITEM = re.compile(
	r"\s*(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
	r"(?:\s*=\s*(?P<value>[^\s,<=]+(?:\s*<<\s*[^\s,]+)?))?"
	r"\s*,"
)
_RE_DEFINE = re.compile(
	r"\s*#define\s+(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
	r"\s+(?P<value>[^\s<]+(?:\s*<<\s*\S+)?)"
)


class Extraction(BaseModel):
	symbols: List[Symbol] = []
	errors: List[LineError] = []


def _pattern_for(dialect: Dialect) -> re.Pattern[str]:
	return _RE_ENUM_ITEM if dialect is Dialect.ENUM else _RE_DEFINE


def _line_items(line: str, dialect: Dialect):
	"""Yield consecutive matches from the start of ``line``.

	Enum lines may carry several items (``A, B = 4, C,``); each one must start
	where the previous one ended. A define line yields at most one match.
	"""
	pattern = _pattern_for(dialect)
	pos = 0
	while True:
		m = pattern.match(line, pos)
		if m is None:
			rest = line[pos:].strip()
			if pos and rest:
				logger.debug("ignoring text after last item: %r", rest)
			return
		yield m
		if dialect is Dialect.DEFINE or m.end() == pos:
			return
		pos = m.end()


def extract_symbols(
	lines: Iterable[str],
	dialect: Dialect,
	*,
	policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
	source: str = "<input>",
) -> Extraction:
	symbols: List[Symbol] = []
	errors: List[LineError] = []
	next_value = 0

	for lineno, raw in enumerate(lines, start=1):
		line = raw.rstrip("\r\n")
		for m in _line_items(line, dialect):
			token: Optional[str] = m.group("value")
			if token is None:
				value = next_value
			else:
				try:
					value = evaluate_literal(token)
				except MalformedLiteral as e:
					if policy is ErrorPolicy.FAIL_FAST:
						raise MalformedLiteral(f"{source}:{lineno}: {e}") from None
					logger.warning("%s:%d: skipping %s: %s", source, lineno, m.group("name"), e)
					errors.append(LineError(line=lineno, text=line, message=str(e)))
					continue
			symbols.append(Symbol(value=value, name=m.group("name")))
			next_value = wrap_i32(value + 1)

	logger.debug("extracted %d symbols from %s (%s)", len(symbols), source, dialect.value)
	return Extraction(symbols=symbols, errors=errors)


def extract_text(
	text: str,
	dialect: Dialect,
	*,
	policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
	source: str = "<input>",
) -> Extraction:
	return extract_symbols(text.splitlines(), dialect, policy=policy, source=source)
