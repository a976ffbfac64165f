import re
from textwrap import dedent

import pytest

from enumgen.canonical import canonicalize
from enumgen.emit import (
	Capability,
	emit,
	emit_declaration,
	format_mask,
	generate,
	render_literal,
	selected_capabilities,
)
from enumgen.errors import InvalidBitflagTable
from enumgen.model import EmissionConfig, Symbol


def _table(*pairs):
	return canonicalize([Symbol(value=v, name=n) for v, n in pairs])


NETLINK = _table((0, "ROUTE"), (1, "UNUSED"), (3, "FIREWALL"), (4, "SOCK_DIAG"), (16, "GENERIC"))
FLAGS = _table((1, "A"), (2, "B"), (4, "C"))


def test_render_literal():
	assert render_literal(255, False) == "255"
	assert render_literal(255, True) == "0xFF"
	assert render_literal(-1, False) == "-1"
	assert render_literal(-1, True) == "-0x1"
	assert render_literal(-2147483648, True) == "-0x80000000"


def test_declaration():
	out = emit_declaration("Family", NETLINK, False, "Debug, PartialEq")
	assert out == dedent(
		"""\
		#[allow(dead_code, non_camel_case_types)]
		#[derive(Debug, PartialEq)]
		pub enum Family {
		    ROUTE = 0,
		    UNUSED = 1,
		    FIREWALL = 3,
		    SOCK_DIAG = 4,
		    GENERIC = 16,
		}
		"""
	)


def test_declaration_hex_without_derive():
	out = emit_declaration("Name", FLAGS, True)
	assert "#[derive" not in out
	assert "    C = 0x4,\n" in out
	assert out.startswith("#[allow(dead_code, non_camel_case_types)]\npub enum Name {\n")


def test_default_is_smallest_value():
	out = emit(Capability.DEFAULT, "Family", NETLINK, False)
	assert out == dedent(
		"""\
		impl Default for Family {
		    fn default() -> Family {
		        Family::ROUTE
		    }
		}
		"""
	)


def test_display_and_from_str_round_trip():
	display = emit(Capability.DISPLAY, "Family", NETLINK, False)
	from_str = emit(Capability.FROM_STR, "Family", NETLINK, False)

	to_text = dict(re.findall(r'Family::(\w+) => write!\(f, "([^"]*)"\)', display))
	from_text = dict(re.findall(r'"([^"]*)" => Ok\(Family::(\w+)\)', from_str))

	assert len(to_text) == len(NETLINK)
	for sym in NETLINK.symbols:
		assert from_text[to_text[sym.name]] == sym.name
		assert NETLINK.lookup_name(to_text[sym.name]) == sym
	assert "            _ => Err( () )\n" in from_str
	assert from_str.startswith("impl ::std::str::FromStr for Family {\n    type Err = ();\n")


@pytest.mark.parametrize("hex", [False, True])
def test_from_primitive_maps_every_literal(hex):
	out = emit(Capability.FROM_PRIMITIVE, "Family", NETLINK, hex)
	assert out.startswith("impl ::num::traits::FromPrimitive for Family {\n")
	i64_part, u64_part = out.split("fn from_u64(n: u64)")
	assert "fn from_i64(n: i64) -> Option<Self> {" in i64_part

	for part in (i64_part, u64_part):
		arms = re.findall(r"^ +(0x[0-9A-F]+|-?\d+) => Some\(Family::(\w+)\),$", part, re.M)
		assert len(arms) == len(NETLINK)
		for literal, member in arms:
			value = int(literal, 16) if literal.startswith("0x") else int(literal)
			assert NETLINK.lookup_value(value).name == member
		assert "            _ => None\n" in part

	assert NETLINK.lookup_value(2) is None
	if hex:
		assert "0x10 => Some(Family::GENERIC)" in out


def test_pretty_fmt_loops_up_to_largest_symbol():
	out = emit(Capability.PRETTY_FMT, "Flags", FLAGS, False)
	assert out.startswith("impl Flags {\n")
	assert "        while result <= Flags::C as u32 {\n" in out
	assert "                let flag = Flags::from_u32(tmp).unwrap();\n" in out
	assert '                try!(write!(f, "{}", flag));\n' in out
	assert out.endswith('        write!(f, "")\n    }\n}\n')


def test_format_mask():
	assert format_mask(FLAGS, 5) == "A|C"
	assert format_mask(FLAGS, 7) == "A|B|C"
	assert format_mask(FLAGS, 2) == "B"
	assert format_mask(FLAGS, 0) == ""
	# bits above the largest flag are never visited
	assert format_mask(FLAGS, 8 | 1) == "A"


def test_format_mask_unknown_bit():
	table = _table((1, "A"), (4, "C"))
	with pytest.raises(ValueError):
		format_mask(table, 2)


def test_emitters_are_deterministic():
	for cap in Capability:
		assert emit(cap, "Flags", FLAGS, True) == emit(cap, "Flags", FLAGS, True)


def test_pretty_fmt_implies_display_and_from_primitive():
	config = EmissionConfig(pretty_fmt=True)
	assert selected_capabilities(config) == [
		Capability.DISPLAY,
		Capability.FROM_PRIMITIVE,
		Capability.PRETTY_FMT,
	]
	assert config.display is False
	assert config.normalized().display is True


def test_generate_order_and_default_name():
	config = EmissionConfig(fromstr=True, default=True, display=True, fromprimative=True)
	out = generate(NETLINK, config)
	heads = [line for line in out.splitlines() if line and not line.startswith((" ", "}"))]
	assert heads == [
		"#[allow(dead_code, non_camel_case_types)]",
		"pub enum Name {",
		"impl ::std::str::FromStr for Name {",
		"impl Default for Name {",
		"impl ::std::fmt::Display for Name {",
		"impl ::num::traits::FromPrimitive for Name {",
	]


def test_generate_declaration_only():
	out = generate(FLAGS, EmissionConfig(name="Bits"))
	assert out == emit_declaration("Bits", FLAGS, False)


def test_generate_rejects_non_bit_sentinel():
	table = _table((1, "A"), (2, "B"), (3, "AB"))
	with pytest.raises(InvalidBitflagTable, match="AB"):
		generate(table, EmissionConfig(pretty_fmt=True))
	out = generate(table, EmissionConfig(pretty_fmt=True, check_bitflags=False))
	assert "while result <= Name::AB as u32" in out


def test_negative_values_round_trip_in_hex():
	table = _table((-1, "NEG"), (-256, "LOW"), (1, "ONE"))
	decl = emit_declaration("T", table, True)
	assert "    NEG = -0x1,\n" in decl
	assert "    LOW = -0x100,\n" in decl

	out = emit(Capability.FROM_PRIMITIVE, "T", table, True)
	i64_part = out.split("fn from_u64(n: u64)")[0]
	arms = re.findall(r"^ +(-?0x[0-9A-F]+) => Some\(T::(\w+)\),$", i64_part, re.M)
	assert len(arms) == len(table)
	for literal, member in arms:
		assert table.lookup_value(int(literal, 16)).name == member
