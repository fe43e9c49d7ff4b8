"""Wire adapters into projects and runners."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from storyline.adapters.execution.grammar_engine import (
    Grammar,
    GrammarEngine,
    GrammarModuleError,
    load_grammars,
)
from storyline.adapters.filesystem import LocalFileSystem
from storyline.adapters.hierarchy_loader import load_hierarchy
from storyline.adapters.id_generators import ULIDGenerator
from storyline.adapters.project_file import ProjectFileError, load_project
from storyline.adapters.results import JsonResultWriter
from storyline.adapters.test_xml import XmlTestReader, XmlTestWriter
from storyline.domain.errors import StorylineError
from storyline.interfaces.test_io import TestParseError
from storyline.service_layer.runner import ProjectRunner

__all__ = [
    "AppContainer",
    "GrammarModuleError",
    "ProjectFileError",
    "StorylineError",
    "TestParseError",
    "build_container",
    "build_runner",
    "load_grammars",
    "load_projects",
]

if TYPE_CHECKING:
    from storyline.interfaces.filesystem import FileSystem, PathLike
    from storyline.interfaces.id_generator import IdGenerator
    from storyline.interfaces.results import ResultWriter
    from storyline.interfaces.test_io import TestReader, TestWriter
    from storyline.service_layer.project import Project


@dataclass(frozen=True)
class AppContainer:
    """The concrete collaborators shared by one invocation."""

    filesystem: FileSystem
    reader: TestReader
    writer: TestWriter
    result_writer: ResultWriter
    id_generator: IdGenerator = field(default_factory=ULIDGenerator)


def build_container(filesystem: FileSystem | None = None) -> AppContainer:
    """Build the default container (local disk unless `filesystem` is given)."""
    fs = filesystem if filesystem is not None else LocalFileSystem()
    return AppContainer(
        filesystem=fs,
        reader=XmlTestReader(fs),
        writer=XmlTestWriter(fs),
        result_writer=JsonResultWriter(fs),
    )


def load_projects(paths: Sequence[PathLike], container: AppContainer) -> list[Project]:
    """Load each project file, bound to the container's filesystem and writer."""
    return [load_project(p, container.filesystem, container.writer) for p in paths]


def build_runner(  # pylint: disable=too-many-arguments
    projects: Sequence[Project],
    container: AppContainer,
    *,
    grammars: Mapping[str, Grammar],
    results_path: PathLike | None = None,
    workspace: str | None = None,
    max_workers: int = 1,
) -> ProjectRunner:
    """Build a runner whose projects all execute against `grammars`."""
    return ProjectRunner(
        projects,
        results_path,
        hierarchy_loader=lambda project: load_hierarchy(
            project, container.reader, container.filesystem
        ),
        engine_factory=lambda project: GrammarEngine(grammars),
        result_writer=container.result_writer,
        id_generator=container.id_generator,
        workspace=workspace,
        max_workers=max_workers,
    )
