from __future__ import annotations

from dataclasses import dataclass

from helix.env import env

DEFAULT_RUNTIME_MODULE = "helix-runtime"
DEFAULT_NS = "user"


@dataclass(slots=True, frozen=True)
class CompilerOptions:
	"""Compile-time configuration threaded through every compiler.

	debug: emit dev instrumentation (display names, refresh signatures,
		registry calls). Production output carries none of it.
	runtime_module: module the generated code imports runtime helpers from.
	default_ns: namespace used for qualified names when a file has no `ns`.
	emit_effects: write registration effects into the module output. When
		False they are only returned on the compiled result.
	"""

	debug: bool = False
	runtime_module: str = DEFAULT_RUNTIME_MODULE
	default_ns: str = DEFAULT_NS
	emit_effects: bool = True

	@classmethod
	def from_env(cls, **overrides: object) -> CompilerOptions:
		values: dict[str, object] = {
			"debug": env.debug,
			"runtime_module": env.runtime_module or DEFAULT_RUNTIME_MODULE,
			"default_ns": env.default_ns or DEFAULT_NS,
		}
		values.update({k: v for k, v in overrides.items() if v is not None})
		return cls(**values)  # pyright: ignore[reportArgumentType]
