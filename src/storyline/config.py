"""Configuration utilities for STORYLINE.

This module centralizes constants and small environment helpers related to
application configuration.
"""

import os
from pathlib import Path

DEFAULT_TEST_FOLDER = "Tests"
DEFAULT_COMPILE_TARGET = "debug"
BINARY_FOLDER_NAME = "bin"
TEST_FILE_EXTENSION = ".xml"

# Checked in this order; the assembly-specific name comes last.
CONFIGURATION_FILE_CANDIDATES = ("App.config", "app.config", "Web.config", "web.config")
ASSEMBLY_CONFIGURATION_SUFFIX = ".dll.config"

PROJECT_FILE_ENV_VAR = "STORYLINE_PROJECT"  # pragma: no mutate
WORKERS_ENV_VAR = "STORYLINE_WORKERS"  # pragma: no mutate
DEFAULT_MAX_WORKERS = 1


class ProjectFileNotSetError(Exception):
    """Raised when no project file was given and STORYLINE_PROJECT is not set."""


class InvalidWorkerCountError(ValueError):
    """Raised when STORYLINE_WORKERS is not a positive integer."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"{WORKERS_ENV_VAR} must be a positive integer, got {value!r}."
        )
        self.value = value


def get_project_file() -> Path:
    """Get the default project file from the environment.

    Returns:
        The value of the `STORYLINE_PROJECT` environment variable as a Path.

    Raises:
        ProjectFileNotSetError: If `STORYLINE_PROJECT` is not set.
    """
    if not (path := os.environ.get(PROJECT_FILE_ENV_VAR)):
        raise ProjectFileNotSetError
    return Path(path)


def get_max_workers() -> int:
    """Get the number of worker threads used to run tests within one project.

    Returns:
        The value of `STORYLINE_WORKERS`, or 1 when it is unset.

    Raises:
        InvalidWorkerCountError: If the value is not a positive integer.
    """
    if not (raw := os.environ.get(WORKERS_ENV_VAR)):
        return DEFAULT_MAX_WORKERS
    try:
        workers = int(raw)
    except ValueError as e:
        raise InvalidWorkerCountError(raw) from e
    if workers < 1:
        raise InvalidWorkerCountError(raw)
    return workers
