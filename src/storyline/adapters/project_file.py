"""Project descriptor files.

A project file is a small XML document; every element is optional and falls
back to the `Project` default::

    <?xml version='1.0' encoding='utf-8'?>
    <Project>
      <Name>shop</Name>
      <TestFolder>Tests</TestFolder>
      <BinaryFolder>build/out</BinaryFolder>
      <CompileTarget>release</CompileTarget>
      <Workspace>checkout</Workspace>
      <AssemblyName>Shop.Specs</AssemblyName>
      <ConfigurationFileName>/etc/shop/App.config</ConfigurationFileName>
    </Project>

The project folder is always the directory holding the file.
"""

import logging
import os
import xml.etree.ElementTree as ET

from storyline.interfaces.filesystem import FileSystem, PathLike
from storyline.interfaces.test_io import TestWriter
from storyline.service_layer.project import Project

logger = logging.getLogger(__name__)

ROOT_TAG = "Project"
XML_DECLARATION = "<?xml version='1.0' encoding='utf-8'?>\n"

# element tag -> Project attribute, in document order
_FIELDS = (
    ("Name", "name"),
    ("TestFolder", "test_folder"),
    ("BinaryFolder", "binary_folder"),
    ("CompileTarget", "compile_target"),
    ("Workspace", "workspace"),
    ("AssemblyName", "assembly_name"),
    ("ConfigurationFileName", "configuration_file_name"),
)


class ProjectFileError(Exception):
    """Raised when a project file is missing or malformed."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"Cannot load project file {path}: {reason}")
        self.path = path
        self.reason = reason


def load_project(
    path: PathLike, filesystem: FileSystem, writer: TestWriter | None = None
) -> Project:
    """Load the project described by the file at `path`.

    Raises:
        ProjectFileError: If the file is missing, is not XML, or has an
            unexpected root element.
    """
    try:
        text = filesystem.read_text(path)
    except (FileNotFoundError, IsADirectoryError) as e:
        raise ProjectFileError(path, "file does not exist") from e

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ProjectFileError(path, f"malformed XML ({e})") from e
    if root.tag != ROOT_TAG:
        raise ProjectFileError(path, f"expected <{ROOT_TAG}> root, found <{root.tag}>")

    settings: dict[str, str] = {}
    for tag, attribute in _FIELDS:
        element = root.find(tag)
        if element is not None:
            settings[attribute] = (element.text or "").strip()

    project = Project(path, filesystem=filesystem, writer=writer, **settings)
    logger.debug("Loaded %r from %s", project, path)
    return project


def save_project(
    project: Project, filesystem: FileSystem, path: PathLike | None = None
) -> str:
    """Write `project`'s settings to `path` (default: its own project file).

    Only explicitly set values are written; the lazily discovered
    configuration file is not.

    Returns:
        The absolute path written.

    Raises:
        ValueError: If no path is given and the project has no project file.
    """
    target = path if path is not None else project.project_file_name
    if target is None:
        raise ValueError("The project has no project file; pass a path.")

    root = ET.Element(ROOT_TAG)
    values = {
        "name": project.name,
        "test_folder": project.test_folder,
        "binary_folder": project.binary_folder,
        "compile_target": project.compile_target,
        "workspace": project.workspace,
        "assembly_name": project.assembly_name,
        "configuration_file_name": project.configuration_override,
    }
    for tag, attribute in _FIELDS:
        if (value := values[attribute]) is not None:
            ET.SubElement(root, tag).text = value
    ET.indent(root)

    absolute = os.path.abspath(os.fspath(target))
    filesystem.make_dirs(os.path.dirname(absolute))
    document = XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
    filesystem.write_text(absolute, document)
    logger.debug("Saved project %r to %s", project.name, absolute)
    return absolute
