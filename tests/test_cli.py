from pathlib import Path

import pytest
from helix.cli import cli
from helix.env import ENV_HELIX_DEBUG
from typer.testing import CliRunner

runner = CliRunner()

SOURCE = """
(ns app.main)

(defnc counter [props]
  (let [[n set-n] (use-state 0)]
    ($ "button" {:on-click (fn [] (set-n (inc n)))} n)))

(defcomponent clock (render [this] nil))
"""


@pytest.fixture(autouse=True)
def no_debug_env(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.delenv(ENV_HELIX_DEBUG, raising=False)


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
	path = tmp_path / "app.cljs"
	path.write_text(SOURCE)
	return path


def test_compile_to_stdout(source_file: Path):
	result = runner.invoke(cli, ["compile", str(source_file)])
	assert result.exit_code == 0, result.output
	assert "export const counter = counter_helix_render;" in result.stdout
	assert "signature" not in result.stdout


def test_compile_dev_flag(source_file: Path):
	result = runner.invoke(cli, ["compile", str(source_file), "--dev"])
	assert result.exit_code == 0, result.output
	assert "const sig_1 = signature();" in result.stdout
	assert 'register(counter_helix_render, "app.main/counter");' in result.stdout


def test_compile_dev_without_effects(source_file: Path):
	result = runner.invoke(cli, ["compile", str(source_file), "--dev", "--no-effects"])
	assert result.exit_code == 0, result.output
	assert "register(" not in result.stdout


def test_compile_debug_from_env(source_file: Path, monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_HELIX_DEBUG, "1")
	result = runner.invoke(cli, ["compile", str(source_file)])
	assert "signature()" in result.stdout
	result = runner.invoke(cli, ["compile", str(source_file), "--prod"])
	assert "signature()" not in result.stdout


def test_compile_to_file(source_file: Path, tmp_path: Path):
	out = tmp_path / "build" / "app.js"
	result = runner.invoke(
		cli, ["compile", str(source_file), "-o", str(out), "--runtime", "rt"]
	)
	assert result.exit_code == 0, result.output
	code = out.read_text()
	assert code.startswith('import { createElement, createComponent } from "rt";\n')


def test_compile_error_exits_nonzero(tmp_path: Path):
	path = tmp_path / "bad.cljs"
	path.write_text("(defcomponent c (other [this] 1))")
	result = runner.invoke(cli, ["compile", str(path)])
	assert result.exit_code == 1


def test_missing_file(tmp_path: Path):
	result = runner.invoke(cli, ["compile", str(tmp_path / "nope.cljs")])
	assert result.exit_code == 1


def test_hooks_table(source_file: Path):
	result = runner.invoke(cli, ["hooks", str(source_file)])
	assert result.exit_code == 0, result.output
	assert "counter" in result.stdout
	assert "use-state" in result.stdout
	assert "clock" not in result.stdout


def test_wrong_arity_reports_location(tmp_path: Path):
	path = tmp_path / "arity.cljs"
	path.write_text('(defnc x [p]\n  ($ "div" (get m)))')
	result = runner.invoke(cli, ["compile", str(path)])
	assert result.exit_code == 1
	# rich wraps long lines at the console width
	output = " ".join(result.output.split())
	assert "Wrong number of arguments (1) passed to get" in output
	assert "line 2" in output
	assert "Traceback" not in output
