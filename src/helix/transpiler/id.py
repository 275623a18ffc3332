"""Counter for generated identifiers (gensyms)."""

from __future__ import annotations

_id_counter: int = 0


def next_id() -> str:
	"""Return the next unique id as a string."""
	global _id_counter
	_id_counter += 1
	return str(_id_counter)


def reset_id_counter() -> None:
	"""Reset the id counter. Tests call this for deterministic output."""
	global _id_counter
	_id_counter = 0


def gensym(prefix: str) -> str:
	"""A fresh JS identifier: gensym("sig") -> "sig_1"."""
	return f"{prefix}_{next_id()}"
