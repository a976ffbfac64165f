from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional, Tuple

from .canonical import canonicalize
from .config import load_config_file
from .emit import generate
from .errors import ErrorPolicy, IOFailure
from .extract import Dialect, extract_text
from .fs_scan import scan_config_tree
from .model import BatchJob, EmissionConfig, GenerateResult


logger = logging.getLogger(__name__)

STDIN_NAME = "standard in"


def dialect_for(config: EmissionConfig) -> Dialect:
	return Dialect.DEFINE if config.define else Dialect.ENUM


def generate_from_text(
	text: str,
	config: EmissionConfig,
	*,
	policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
	source: str = "<input>",
) -> GenerateResult:
	extraction = extract_text(text, dialect_for(config), policy=policy, source=source)
	table = canonicalize(extraction.symbols, source=source)
	code = generate(table, config)
	return GenerateResult(code=code, table=table, diagnostics=extraction.errors)


def _read_source(input_path: Optional[str]) -> Tuple[str, str]:
	if input_path is None:
		return sys.stdin.read(), STDIN_NAME
	try:
		with open(input_path, "r", encoding="utf-8") as fh:
			return fh.read(), input_path
	except OSError as e:
		raise IOFailure(f"couldn't read {input_path}: {e.strerror or e}") from None


def _write_output(output_path: Optional[str], code: str) -> None:
	if output_path is None:
		sys.stdout.write(code)
		sys.stdout.flush()
		return
	try:
		parent = os.path.dirname(output_path)
		if parent:
			os.makedirs(parent, exist_ok=True)
		with open(output_path, "w", encoding="utf-8") as fh:
			fh.write(code)
	except OSError as e:
		raise IOFailure(f"couldn't write {output_path}: {e.strerror or e}") from None


def process(
	input_path: Optional[str],
	output_path: Optional[str],
	config: EmissionConfig,
	*,
	policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
) -> GenerateResult:
	"""Generate code for one source. ``None`` paths mean stdin and stdout.

	Nothing is written when extraction or generation fails.
	"""
	text, source = _read_source(input_path)
	result = generate_from_text(text, config, policy=policy, source=source)
	_write_output(output_path, result.code)
	return result


def traverse_dir(
	input_dir: str,
	output_dir: str,
	*,
	policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
) -> List[BatchJob]:
	"""Generate every job under ``input_dir``.

	All configs are loaded before anything is written, so a malformed one
	leaves the output tree untouched.
	"""
	jobs = scan_config_tree(input_dir, output_dir)
	configs = [load_config_file(job.config_path) for job in jobs]
	for job, config in zip(jobs, configs):
		logger.debug("batch: %s -> %s", job.input_path, job.output_path)
		process(job.input_path, job.output_path, config, policy=policy)
	logger.info("generated %d files under %s", len(jobs), output_dir)
	return jobs
