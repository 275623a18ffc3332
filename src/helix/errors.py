from __future__ import annotations

from typing import Any

from typing_extensions import override

from helix.forms import location_of, pr_str

_MAX_FORM_CHARS = 80


class CompileError(Exception):
	"""Compilation of a single form failed.

	Carries the offending form (when known) so tooling can point at its source
	location.
	"""

	form: Any
	line: int | None
	column: int | None

	def __init__(
		self,
		message: str,
		*,
		form: Any = None,
		line: int | None = None,
		column: int | None = None,
	) -> None:
		super().__init__(message)
		self.message = message
		self.form = form
		form_line, form_column = location_of(form)
		self.line = line if line is not None else form_line
		self.column = column if column is not None else form_column

	@property
	def location(self) -> str | None:
		if self.line is None:
			return None
		if self.column is None:
			return f"line {self.line}"
		return f"line {self.line}, column {self.column}"

	@override
	def __str__(self) -> str:
		parts = [self.message]
		if self.form is not None:
			try:
				text = pr_str(self.form)
			except TypeError:
				text = repr(self.form)
			if len(text) > _MAX_FORM_CHARS:
				text = text[: _MAX_FORM_CHARS - 3] + "..."
			parts.append(f"in {text}")
		if (loc := self.location) is not None:
			parts.append(f"({loc})")
		return " ".join(parts)


class ShapeError(CompileError):
	"""A form expected to be a literal map, pattern or list was not."""


class TranspileError(CompileError):
	"""A body form has no JavaScript lowering."""


class ReadError(CompileError):
	"""Source text could not be read into forms."""
