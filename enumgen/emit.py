"""Rust code emitters for a canonical symbol table.

Every emitter is a pure function of ``(type_name, table, hex)`` and returns one
self-contained block ending in a newline. ``generate`` stitches the enum
declaration and the selected capability blocks together.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional

from .errors import InvalidBitflagTable
from .literal import wrap_i32
from .model import EmissionConfig, SymbolTable


class Capability(str, Enum):
	# Definition order is emission order; values are the config keys.
	FROM_STR = "fromstr"
	DEFAULT = "default"
	DISPLAY = "display"
	FROM_PRIMITIVE = "fromprimative"
	PRETTY_FMT = "pretty_fmt"


Emitter = Callable[[str, SymbolTable, bool], str]


def render_literal(value: int, hex: bool) -> str:
	if hex:
		sign = "-" if value < 0 else ""
		return f"{sign}0x{abs(value):X}"
	return str(value)


def _block(lines: List[str]) -> str:
	return "\n".join(lines) + "\n"


def emit_declaration(type_name: str, table: SymbolTable, hex: bool, derive: Optional[str] = None) -> str:
	lines = ["#[allow(dead_code, non_camel_case_types)]"]
	if derive is not None:
		lines.append(f"#[derive({derive})]")
	lines.append(f"pub enum {type_name} {{")
	for sym in table.symbols:
		lines.append(f"    {sym.name} = {render_literal(sym.value, hex)},")
	lines.append("}")
	return _block(lines)


def _emit_display(type_name: str, table: SymbolTable, hex: bool) -> str:
	lines = [
		f"impl ::std::fmt::Display for {type_name} {{",
		"    #[allow(dead_code)]",
		"    fn fmt(&self, f: &mut ::std::fmt::Formatter) -> ::std::fmt::Result {",
		"        match *self {",
	]
	for sym in table.symbols:
		lines.append(f'            {type_name}::{sym.name} => write!(f, "{sym.name}"),')
	lines += ["        }", "    }", "}"]
	return _block(lines)


def _emit_from_str(type_name: str, table: SymbolTable, hex: bool) -> str:
	lines = [
		f"impl ::std::str::FromStr for {type_name} {{",
		"    type Err = ();",
		"    #[allow(dead_code)]",
		"    fn from_str(s: &str) -> Result<Self, Self::Err> {",
		"        match s {",
	]
	for sym in table.symbols:
		lines.append(f'            "{sym.name}" => Ok({type_name}::{sym.name}),')
	lines += ["            _ => Err( () )", "        }", "    }", "}"]
	return _block(lines)


def _emit_default(type_name: str, table: SymbolTable, hex: bool) -> str:
	return _block([
		f"impl Default for {type_name} {{",
		f"    fn default() -> {type_name} {{",
		f"        {type_name}::{table.first.name}",
		"    }",
		"}",
	])


def _from_primitive_fn(fn_name: str, arg_type: str, type_name: str, table: SymbolTable, hex: bool) -> List[str]:
	lines = [
		"    #[allow(dead_code)]",
		f"    fn {fn_name}(n: {arg_type}) -> Option<Self> {{",
		"        match n {",
	]
	for sym in table.symbols:
		lines.append(f"            {render_literal(sym.value, hex)} => Some({type_name}::{sym.name}),")
	lines += ["            _ => None", "        }", "    }"]
	return lines


def _emit_from_primitive(type_name: str, table: SymbolTable, hex: bool) -> str:
	lines = [f"impl ::num::traits::FromPrimitive for {type_name} {{"]
	lines += _from_primitive_fn("from_i64", "i64", type_name, table, hex)
	lines += _from_primitive_fn("from_u64", "u64", type_name, table, hex)
	lines.append("}")
	return _block(lines)


def _emit_pretty_fmt(type_name: str, table: SymbolTable, hex: bool) -> str:
	return _block([
		f"impl {type_name} {{",
		"    fn pretty_fmt(f: &mut ::std::fmt::Formatter, flags: u32) -> ::std::fmt::Result {",
		"        let mut shift: u32 = 0;",
		"        let mut result: u32 = 1<<shift;",
		"        let mut found = false;",
		f"        while result <= {type_name}::{table.last.name} as u32 {{",
		"            let tmp = result & flags;",
		"            if tmp > 0 {",
		"                if found {",
		'                    try!(write!(f, "|"));',
		"                }",
		f"                let flag = {type_name}::from_u32(tmp).unwrap();",
		'                try!(write!(f, "{}", flag));',
		"                found = true;",
		"            }",
		"            shift += 1;",
		"            result = 1<<shift;",
		"        }",
		'        write!(f, "")',
		"    }",
		"}",
	])


_EMITTERS: Dict[Capability, Emitter] = {
	Capability.FROM_STR: _emit_from_str,
	Capability.DEFAULT: _emit_default,
	Capability.DISPLAY: _emit_display,
	Capability.FROM_PRIMITIVE: _emit_from_primitive,
	Capability.PRETTY_FMT: _emit_pretty_fmt,
}


def emit(capability: Capability, type_name: str, table: SymbolTable, hex: bool) -> str:
	return _EMITTERS[capability](type_name, table, hex)


def selected_capabilities(config: EmissionConfig) -> List[Capability]:
	config = config.normalized()
	return [cap for cap in Capability if getattr(config, cap.value)]


def is_single_bit(value: int) -> bool:
	return value > 0 and value & (value - 1) == 0


def check_bitflag_table(table: SymbolTable) -> None:
	last = table.last
	if not is_single_bit(last.value):
		raise InvalidBitflagTable(
			f"pretty_fmt needs the largest value to be a single bit, "
			f"but {last.name} is {render_literal(last.value, True)}"
		)


def format_mask(table: SymbolTable, mask: int) -> str:
	"""Render ``mask`` the way the emitted ``pretty_fmt`` does.

	Walks the powers of two up to the table's largest value and joins the names
	of the set bits with ``|``. Raises ``ValueError`` for a set bit that has no
	symbol, where the generated code would panic on ``unwrap()``.
	"""
	limit = table.last.value & 0xFFFFFFFF
	mask &= 0xFFFFFFFF
	names: List[str] = []
	for shift in range(32):
		bit = 1 << shift
		if bit > limit:
			break
		if bit & mask:
			sym = table.lookup_value(wrap_i32(bit))
			if sym is None:
				raise ValueError(f"no symbol for flag {render_literal(bit, True)}")
			names.append(sym.name)
	return "|".join(names)


def generate(table: SymbolTable, config: EmissionConfig) -> str:
	config = config.normalized()
	capabilities = selected_capabilities(config)
	if Capability.PRETTY_FMT in capabilities and config.check_bitflags:
		check_bitflag_table(table)
	parts = [emit_declaration(config.type_name, table, config.hex, config.derive)]
	for cap in capabilities:
		parts.append(emit(cap, config.type_name, table, config.hex))
	return "".join(parts)
