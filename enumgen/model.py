from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, model_validator


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"
DEFAULT_TYPE_NAME = "Name"


class Symbol(BaseModel):
	"""One named constant. Equality, hashing and ordering look at ``value`` only."""

	model_config = ConfigDict(frozen=True)

	value: int = Field(ge=INT32_MIN, le=INT32_MAX)
	name: str = Field(pattern=IDENTIFIER_PATTERN)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Symbol):
			return NotImplemented
		return self.value == other.value

	def __hash__(self) -> int:
		return hash(self.value)

	def __lt__(self, other: Symbol) -> bool:
		return self.value < other.value

	def __le__(self, other: Symbol) -> bool:
		return self.value <= other.value

	def __gt__(self, other: Symbol) -> bool:
		return self.value > other.value

	def __ge__(self, other: Symbol) -> bool:
		return self.value >= other.value


class SymbolTable(BaseModel):
	model_config = ConfigDict(frozen=True)

	symbols: Tuple[Symbol, ...]

	@model_validator(mode="after")
	def _check_order(self) -> SymbolTable:
		if not self.symbols:
			raise ValueError("a symbol table needs at least one symbol")
		for prev, cur in zip(self.symbols, self.symbols[1:]):
			if cur.value < prev.value:
				raise ValueError(f"symbols out of order: {prev.name} before {cur.name}")
		return self

	def __len__(self) -> int:
		return len(self.symbols)

	@property
	def first(self) -> Symbol:
		return self.symbols[0]

	@property
	def last(self) -> Symbol:
		return self.symbols[-1]

	def lookup_name(self, name: str) -> Optional[Symbol]:
		for sym in self.symbols:
			if sym.name == name:
				return sym
		return None

	def lookup_value(self, value: int) -> Optional[Symbol]:
		# first arm wins, as in a match over the table
		for sym in self.symbols:
			if sym.value == value:
				return sym
		return None

	def duplicate_values(self) -> Dict[int, List[str]]:
		groups: Dict[int, List[str]] = {}
		for sym in self.symbols:
			groups.setdefault(sym.value, []).append(sym.name)
		return {value: names for value, names in groups.items() if len(names) > 1}


class EmissionConfig(BaseModel):
	"""Per-source generation options.

	Keys mirror the ``[rust-enum-derive]`` table of a batch configuration file.
	"""

	model_config = ConfigDict(frozen=True, extra="forbid")

	name: Optional[StrictStr] = Field(default=None, pattern=IDENTIFIER_PATTERN)
	derive: Optional[StrictStr] = None
	define: StrictBool = False
	default: StrictBool = False
	display: StrictBool = False
	fromprimative: StrictBool = False
	fromstr: StrictBool = False
	hex: StrictBool = False
	pretty_fmt: StrictBool = False
	check_bitflags: StrictBool = True

	@property
	def type_name(self) -> str:
		return self.name or DEFAULT_TYPE_NAME

	def normalized(self) -> EmissionConfig:
		"""Resolve flag dependencies: pretty_fmt needs fromprimative and display."""
		if self.pretty_fmt and not (self.fromprimative and self.display):
			return self.model_copy(update={"fromprimative": True, "display": True})
		return self


class LineError(BaseModel):
	line: int
	text: str
	message: str


class GenerateResult(BaseModel):
	code: str
	table: SymbolTable
	diagnostics: List[LineError] = []


class BatchJob(BaseModel):
	config_path: str
	input_path: str
	output_path: str
	rel_dir: str
