from __future__ import annotations

import re

from .errors import MalformedLiteral
from .model import INT32_MAX, INT32_MIN


_RE_INT = re.compile(r"^(-)?(0x)?([0-9A-Fa-f]+)$")
_RE_SHIFT = re.compile(r"^([0-9]+)\s*<<\s*([0-9]+)$")


def wrap_i32(value: int) -> int:
	value &= 0xFFFFFFFF
	if value > INT32_MAX:
		value -= 1 << 32
	return value


def _parse_int(sign: str, prefix: str, digits: str, token: str) -> int:
	base = 16 if prefix else 10
	try:
		value = int(digits, base)
	except ValueError:
		raise MalformedLiteral(f"couldn't parse '{token}' as int") from None
	if sign:
		value = -value
	if not INT32_MIN <= value <= INT32_MAX:
		raise MalformedLiteral(f"'{token}' does not fit in a 32-bit signed integer")
	return value


def evaluate_literal(token: str) -> int:
	"""Evaluate a decimal, ``0x`` hex or ``a << b`` token as a signed 32-bit int.

	Shift results wrap to two's complement, so ``1<<31`` is ``-2147483648``.
	Shift amounts of 32 or more leave no bits in range and give 0.
	"""
	s = token.strip()
	m = _RE_INT.match(s)
	if m:
		return _parse_int(m.group(1) or "", m.group(2) or "", m.group(3), token)
	m = _RE_SHIFT.match(s)
	if m:
		left = _parse_int("", "", m.group(1), token)
		right = int(m.group(2))
		if right >= 32:
			return 0
		return wrap_i32(left << right)
	raise MalformedLiteral(f"couldn't parse '{token}' as int")
