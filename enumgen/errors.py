from __future__ import annotations

from enum import Enum


class EnumGenError(RuntimeError):
	pass


class MalformedLiteral(EnumGenError):
	pass


class MalformedConfiguration(EnumGenError):
	pass


class EmptyTable(EnumGenError):
	pass


class IOFailure(EnumGenError):
	pass


class NotADirectory(EnumGenError):
	pass


class InvalidBitflagTable(EnumGenError):
	pass


class ErrorPolicy(str, Enum):
	"""How the extractor reacts to a line it cannot evaluate."""

	FAIL_FAST = "fail_fast"
	COLLECT = "collect"
