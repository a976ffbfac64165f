"""Emission configuration from TOML files or parsed command-line flags.

A configuration file carries one ``[rust-enum-derive]`` table::

    [rust-enum-derive]
    name = "NetlinkFamily"
    derive = "Debug, PartialEq"
    define = true
    display = true
    hex = true
"""

from __future__ import annotations

import argparse
import logging
import tomllib
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from .errors import IOFailure, MalformedConfiguration
from .model import EmissionConfig


logger = logging.getLogger(__name__)

TABLE_NAME = "rust-enum-derive"
CONFIG_SUFFIX = ".toml"
FLAG_KEYS = ("define", "default", "display", "fromprimative", "fromstr", "hex", "pretty_fmt")
ALL_KEYS = ("default", "display", "fromprimative", "fromstr", "pretty_fmt")


def _describe(err: ValidationError) -> str:
	problems = []
	for item in err.errors():
		key = ".".join(str(p) for p in item["loc"]) or "<table>"
		problems.append(f"{key}: {item['msg']}")
	return "; ".join(problems)


def build_config(values: Mapping[str, Any], *, source: str = "<config>") -> EmissionConfig:
	try:
		config = EmissionConfig.model_validate(dict(values))
	except ValidationError as e:
		raise MalformedConfiguration(f"{source}: {_describe(e)}") from None
	logger.debug("config for %s = %r", source, config)
	return config


def load_config_file(path: str) -> EmissionConfig:
	try:
		with open(path, "rb") as fh:
			data = tomllib.load(fh)
	except OSError as e:
		raise IOFailure(f"couldn't read {path}: {e.strerror or e}") from None
	except tomllib.TOMLDecodeError as e:
		raise MalformedConfiguration(f"failed to parse {path}: {e}") from None

	if TABLE_NAME not in data:
		raise MalformedConfiguration(f"couldn't find a {TABLE_NAME} table in {path}")
	table = data[TABLE_NAME]
	if not isinstance(table, dict):
		raise MalformedConfiguration(f"{TABLE_NAME} wasn't a table in {path}")
	return build_config(table, source=path)


def config_from_args(args: argparse.Namespace) -> EmissionConfig:
	values: Dict[str, Any] = {}
	if args.name is not None:
		values["name"] = args.name
	if args.derive is not None:
		values["derive"] = args.derive
	for key in FLAG_KEYS:
		values[key] = bool(getattr(args, key))
	if args.all:
		for key in ALL_KEYS:
			values[key] = True
	values["check_bitflags"] = args.check_bitflags
	return build_config(values, source="command line")
