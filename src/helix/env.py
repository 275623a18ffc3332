"""Environment variables read by the compiler and CLI."""

from __future__ import annotations

import os

ENV_HELIX_DEBUG = "HELIX_DEBUG"
ENV_HELIX_RUNTIME_MODULE = "HELIX_RUNTIME_MODULE"
ENV_HELIX_DEFAULT_NS = "HELIX_DEFAULT_NS"

_TRUTHY = {"1", "true", "yes", "on"}


class HelixEnv:
	"""Typed accessors over os.environ.

	Values are read on every access so tests and the CLI can set variables
	after import.
	"""

	def _get(self, key: str) -> str | None:
		value = os.environ.get(key)
		if value is None or value.strip() == "":
			return None
		return value.strip()

	def _set(self, key: str, value: str | None) -> None:
		if value is None:
			os.environ.pop(key, None)
		else:
			os.environ[key] = value

	@property
	def debug(self) -> bool:
		value = self._get(ENV_HELIX_DEBUG)
		return value is not None and value.lower() in _TRUTHY

	@debug.setter
	def debug(self, value: bool) -> None:
		self._set(ENV_HELIX_DEBUG, "1" if value else "0")

	@property
	def runtime_module(self) -> str | None:
		return self._get(ENV_HELIX_RUNTIME_MODULE)

	@runtime_module.setter
	def runtime_module(self, value: str | None) -> None:
		self._set(ENV_HELIX_RUNTIME_MODULE, value)

	@property
	def default_ns(self) -> str | None:
		return self._get(ENV_HELIX_DEFAULT_NS)

	@default_ns.setter
	def default_ns(self, value: str | None) -> None:
		self._set(ENV_HELIX_DEFAULT_NS, value)


env = HelixEnv()
