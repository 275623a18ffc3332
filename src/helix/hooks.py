"""Static hook-usage analysis for fast-refresh signatures.

Scans unevaluated body forms for calls whose head follows the hook naming
convention (`use-state`, `useEffect`, `hooks/use-memo`). Nothing is
evaluated. The resulting order is depth-first, left to right, so unrelated
edits between hook calls never reorder the signature.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from helix.forms import Form, FormList, FormMap, FormSet, Symbol, Vector, pr_str

_CAMEL_HOOK_RE = re.compile(r"^use[A-Z]")


def is_hook(x: Form) -> bool:
	"""True if `x` is a symbol named like a hook."""
	if not isinstance(x, Symbol):
		return False
	name = x.name
	return name == "use" or name.startswith("use-") or bool(_CAMEL_HOOK_RE.match(name))


def _walk(form: Form) -> Iterator[FormList]:
	if isinstance(form, FormList):
		if form and is_hook(form[0]):
			yield form
		for child in form:
			yield from _walk(child)
	elif isinstance(form, (Vector, FormSet)):
		for child in form:
			yield from _walk(child)
	elif isinstance(form, FormMap):
		for k, v in form.items():
			yield from _walk(k)
			yield from _walk(v)


def find_hooks(body: Iterable[Form]) -> list[FormList]:
	"""Every hook call in `body`, in source order. Duplicates are kept."""
	hooks: list[FormList] = []
	for form in body:
		hooks.extend(_walk(form))
	return hooks


@dataclass(slots=True, frozen=True)
class HookSignature:
	"""Ordered hook calls of one component body."""

	calls: tuple[FormList, ...]

	@classmethod
	def of(cls, body: Iterable[Form]) -> HookSignature:
		return cls(tuple(find_hooks(body)))

	@property
	def key(self) -> str:
		"""Serialized signature handed to the refresh runtime."""
		return "".join(pr_str(call) for call in self.calls)

	@property
	def digest(self) -> str:
		return hashlib.sha1(self.key.encode("utf-8")).hexdigest()

	def __len__(self) -> int:
		return len(self.calls)
