"""Unit tests for environment-driven configuration helpers."""

from pathlib import Path

import pytest

from storyline import config


def test_project_file_from_env(monkeypatch):
    """STORYLINE_PROJECT is returned as a Path."""
    monkeypatch.setenv(config.PROJECT_FILE_ENV_VAR, "specs/shop.proj")

    assert config.get_project_file() == Path("specs/shop.proj")


@pytest.mark.parametrize("value", [None, ""])
def test_project_file_unset(monkeypatch, value):
    """An unset or empty variable raises ProjectFileNotSetError."""
    if value is None:
        monkeypatch.delenv(config.PROJECT_FILE_ENV_VAR, raising=False)
    else:
        monkeypatch.setenv(config.PROJECT_FILE_ENV_VAR, value)

    with pytest.raises(config.ProjectFileNotSetError):
        config.get_project_file()


def test_workers_default(monkeypatch):
    """Without STORYLINE_WORKERS tests run one at a time."""
    monkeypatch.delenv(config.WORKERS_ENV_VAR, raising=False)

    assert config.get_max_workers() == 1


def test_workers_from_env(monkeypatch):
    """A positive integer is accepted."""
    monkeypatch.setenv(config.WORKERS_ENV_VAR, "4")

    assert config.get_max_workers() == 4


@pytest.mark.parametrize("value", ["0", "-2", "many", "1.5"])
def test_workers_invalid(monkeypatch, value):
    """Anything but a positive integer is rejected."""
    monkeypatch.setenv(config.WORKERS_ENV_VAR, value)

    with pytest.raises(config.InvalidWorkerCountError) as exc:
        config.get_max_workers()

    assert exc.value.value == value
    assert isinstance(exc.value, ValueError)
