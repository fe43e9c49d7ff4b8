"""Bootstrap (composition root) for STORYLINE.

Assembles the application at runtime: wires concrete adapters (filesystem,
XML test format, project files, grammar engine, JSON results, ULID run ids)
into the service-layer `Project` and `ProjectRunner`.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `storyline.adapters`, `storyline.service_layer`,
  `storyline.interfaces`, `storyline.domain`, and `storyline.config`.
- Inner layers must not import `storyline.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    GrammarModuleError,
    ProjectFileError,
    StorylineError,
    TestParseError,
    build_container,
    build_runner,
    load_grammars,
    load_projects,
)

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
