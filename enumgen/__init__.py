"""Generate Rust enums and trait impls from C enum bodies and #define lists.

Modules:
- literal.py: Numeric literal evaluation (decimal, hex, left shift).
- extract.py: Constant extraction for the enum and #define dialects.
- canonical.py: Value ordering of extracted symbols into a table.
- emit.py: Enum declaration and capability emitters.
- model.py: Data structures for symbols, tables and configuration.
- config.py: TOML and command-line configuration loading.
- fs_scan.py: Batch-mode directory scanning.
- pipeline.py: Single-file and batch generation drivers.
"""

__all__ = [
	"literal",
	"extract",
	"canonical",
	"emit",
	"model",
	"config",
	"fs_scan",
	"pipeline",
	"errors",
]
