"""
Command-line interface for helix.
Compiles component source files to ES modules and inspects hook signatures.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from helix.definition import FunctionalDefinition, is_definition, parse_definition
from helix.errors import CompileError
from helix.hooks import HookSignature
from helix.module import compile_module
from helix.options import CompilerOptions
from helix.reader import read_string

cli = typer.Typer(
	name="helix",
	help="helix - compile component definitions to React element calls",
	no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
	if not verbose:
		return
	logging.basicConfig(
		level=logging.DEBUG,
		format="%(message)s",
		handlers=[RichHandler(show_path=False)],
		force=True,
	)


def _read_source(console: Console, source: Path) -> str:
	try:
		return source.read_text(encoding="utf-8")
	except OSError as exc:
		console.print(f"❌ Cannot read {source}: {exc}")
		raise typer.Exit(1) from None


@cli.command("compile")
def compile_cmd(
	source: Path = typer.Argument(..., help="Component source file"),
	output: Path | None = typer.Option(
		None, "--output", "-o", help="Write JS here instead of stdout"
	),
	dev: bool | None = typer.Option(
		None,
		"--dev/--prod",
		help="Emit dev instrumentation (default: HELIX_DEBUG)",
	),
	runtime: str | None = typer.Option(
		None, "--runtime", help="Module runtime helpers are imported from"
	),
	no_effects: bool = typer.Option(
		False, "--no-effects", help="Leave registration effects out of the output"
	),
	verbose: bool = typer.Option(False, "--verbose", "-v"),
):
	"""Compile SOURCE to an ES module."""
	_setup_logging(verbose)
	console = Console(stderr=True)
	options = CompilerOptions.from_env(
		debug=dev,
		runtime_module=runtime,
		emit_effects=False if no_effects else None,
	)
	text = _read_source(console, source)
	try:
		module = compile_module(text, options)
	except CompileError as exc:
		console.print(f"❌ {source}: {exc}", markup=False)
		raise typer.Exit(1) from None

	if output is None:
		typer.echo(module.code, nl=False)
		return
	output.parent.mkdir(parents=True, exist_ok=True)
	output.write_text(module.code, encoding="utf-8")
	console.log(
		f"✅ Wrote {output} ({len(module.definitions)} definition(s), "
		+ f"{len(module.effects)} effect(s))"
	)


@cli.command("hooks")
def hooks_cmd(
	source: Path = typer.Argument(..., help="Component source file"),
	verbose: bool = typer.Option(False, "--verbose", "-v"),
):
	"""Print the hook signature of every functional component in SOURCE."""
	_setup_logging(verbose)
	console = Console()
	text = _read_source(console, source)
	try:
		forms = read_string(text)
		definitions = [parse_definition(f) for f in forms if is_definition(f)]
	except CompileError as exc:
		console.print(f"❌ {source}: {exc}", markup=False)
		raise typer.Exit(1) from None

	table = Table(title=f"Hook signatures: {source.name}")
	table.add_column("Component", style="cyan")
	table.add_column("Hooks", justify="right")
	table.add_column("Digest", style="dim")
	table.add_column("Signature")
	for definition in definitions:
		if not isinstance(definition, FunctionalDefinition):
			continue
		signature = HookSignature.of(definition.body)
		table.add_row(
			definition.name.name,
			str(len(signature)),
			signature.digest[:12],
			signature.key,
		)
	console.print(table)


def main():
	cli()


if __name__ == "__main__":
	main()
