from __future__ import annotations

from typer.testing import CliRunner

from rm_preprocessor import __version__
from rm_preprocessor.cli import app, EXIT_CONFIG_ERROR, EXIT_ITEM_ERRORS, EXIT_OK

runner = CliRunner()


def _env(tmp_path):
    return {"RMPREP_LOG_DIR": str(tmp_path / "logs")}


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_run_non_interactive(tmp_path, make_dataset, regression_lines):
    src = make_dataset("All-regression", regression_lines, base=tmp_path / "data")

    result = runner.invoke(
        app,
        ["run", str(tmp_path / "data"), "--keep-non-csv", "--no-move", "--workers", "2", "-y"],
        env=_env(tmp_path),
    )

    assert result.exit_code == EXIT_OK, result.stdout
    assert src.with_suffix(".csv").read_text(encoding="utf-8").splitlines()[0] == "a, b, c"
    assert src.exists()


def test_run_reports_item_errors_with_exit_code(tmp_path, make_dataset):
    make_dataset("dup", ["@inputs a", "@inputs b", "1"], base=tmp_path / "data")

    result = runner.invoke(app, ["run", str(tmp_path / "data"), "-y"], env=_env(tmp_path))

    assert result.exit_code == EXIT_ITEM_ERRORS
    assert "AmbiguousMarkerError" in result.stdout


def test_move_without_output_is_config_error(tmp_path):
    (tmp_path / "data").mkdir()

    result = runner.invoke(app, ["run", str(tmp_path / "data"), "--move", "-y"], env=_env(tmp_path))

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Configuration error" in result.stdout


def test_missing_root_is_config_error(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "nope"), "-y"], env=_env(tmp_path))

    assert result.exit_code == EXIT_CONFIG_ERROR


def test_interactive_prompts_loop_until_confirmed(tmp_path, make_dataset, regression_lines):
    src = make_dataset("iris", regression_lines, base=tmp_path / "data")
    out = tmp_path / "out"

    # first pass declined at the summary, second pass moves into out/
    answers = [
        "n", "n", "n",
        "n", "y", str(out), "y",
    ]
    result = runner.invoke(
        app,
        ["run", str(tmp_path / "data")],
        input="\n".join(answers) + "\n",
        env=_env(tmp_path),
    )

    assert result.exit_code == EXIT_OK, result.stdout
    assert result.stdout.count("Summary of options") == 2
    assert (out / "iris.csv").exists()
    assert not src.with_suffix(".csv").exists()
