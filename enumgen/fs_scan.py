from __future__ import annotations

import os
from typing import List

from .config import CONFIG_SUFFIX
from .errors import NotADirectory
from .model import BatchJob


INPUT_SUFFIX = ".in"
OUTPUT_SUFFIX = ".rs"


def is_config_file(filename: str) -> bool:
	_, ext = os.path.splitext(filename)
	return ext.lower() == CONFIG_SUFFIX


def scan_config_tree(input_dir: str, output_dir: str) -> List[BatchJob]:
	"""Pair every config file under ``input_dir`` with its ``.in`` source and ``.rs`` target.

	Jobs come back in a stable, sorted walk order.
	"""
	if not os.path.isdir(input_dir):
		raise NotADirectory(f"{input_dir} is not a directory")

	jobs: List[BatchJob] = []
	for dirpath, dirnames, filenames in os.walk(input_dir):
		dirnames.sort()
		rel_dir = os.path.relpath(dirpath, input_dir)
		if rel_dir == os.curdir:
			rel_dir = ""
		for filename in sorted(filenames):
			if not is_config_file(filename):
				continue
			stem = os.path.splitext(filename)[0]
			jobs.append(
				BatchJob(
					config_path=os.path.join(dirpath, filename),
					input_path=os.path.join(dirpath, stem + INPUT_SUFFIX),
					output_path=os.path.join(output_dir, rel_dir, stem + OUTPUT_SUFFIX),
					rel_dir=rel_dir,
				)
			)
	return jobs
