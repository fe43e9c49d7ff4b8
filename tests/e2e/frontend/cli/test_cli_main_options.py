"""End-to-end CLI tests for the top-level `storyline` command.

These tests exercise verbosity flags, logger-level overrides and the
in-memory flight recorder by running a small project under various flags.
"""

import re

import pytest

from storyline import __version__
from storyline.entrypoints.cli.main import storyline

# pylint: disable=unused-argument,redefined-outer-name

pytestmark = [pytest.mark.e2e]


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is NOT found in the output string."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


@pytest.fixture
def project(make_project_on_disk):
    """A one-test passing project."""
    return str(make_project_on_disk("shop", {"t1": "yes"}))


def test_version(runner):
    """--version prints the package version."""
    result = runner.invoke(storyline, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_run(runner):
    """The run command is registered."""
    result = runner.invoke(storyline, ["--help"])

    assert result.exit_code == 0
    assert "run" in result.output


def test_default_hides_info(runner, fs, fixtures_module, project):
    """Default verbosity is WARNING, so the run summary log is hidden."""
    result = runner.invoke(
        storyline, ["--no-flight-recorder", "run", project, "-f", fixtures_module]
    )

    assert result.exit_code == 0
    assert_not_in_output(r"Run \S+ finished", result.output)


def test_verbose_shows_info(runner, fs, fixtures_module, project):
    """-v shows INFO records such as the run summary."""
    result = runner.invoke(
        storyline, ["-v", "--no-flight-recorder", "run", project, "-f", fixtures_module]
    )

    assert result.exit_code == 0
    assert_in_output(r"Run \S+ finished", result.output)


def test_logger_level_override_silences_logger(runner, fs, fixtures_module, project):
    """-L raises one logger's level without touching the others."""
    result = runner.invoke(
        storyline,
        [
            "-v",
            "-L",
            "storyline.service_layer.runner=WARNING",
            "--no-flight-recorder",
            "run",
            project,
            "-f",
            fixtures_module,
        ],
    )

    assert result.exit_code == 0
    assert_not_in_output(r"Run \S+ finished", result.output)


def test_bad_logger_level(runner, fs):
    """An unknown level name is a usage error."""
    result = runner.invoke(storyline, ["-L", "storyline=LOUD", "run"])

    assert result.exit_code == 2
    assert "Invalid log level" in result.output


def test_flight_recorder_dumps_on_warning(runner, fs, project):
    """A WARNING flushes DEBUG records to --log-path."""
    log_path = fs / "logs" / "latest.log"

    result = runner.invoke(storyline, ["--log-path", str(log_path), "run", project])

    assert result.exit_code == 1
    text = log_path.read_text(encoding="utf-8")
    assert "did not pass" in text
    assert "DEBUG" in text


def test_force_flush_writes_clean_runs(runner, fs, fixtures_module, project):
    """--force-flush writes the buffer even when nothing went wrong."""
    log_path = fs / "latest.log"

    result = runner.invoke(
        storyline,
        ["--log-path", str(log_path), "--force-flush", "run", project, "-f", fixtures_module],
    )

    assert result.exit_code == 0
    assert_in_output(r"Run \S+ finished", log_path.read_text(encoding="utf-8"))
