"""Build a project's hierarchy from its test folder.

Every directory below the test folder becomes a suite and every ``*.xml`` file
a test. A test whose file name is not the one derived from its hierarchy path
(``<suite path>/<test name>.xml``) keeps its actual location as an explicit
`file_name` override, so saving it again writes back to the same file.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from storyline.config import TEST_FILE_EXTENSION
from storyline.domain.hierarchy import PATH_SEPARATOR, Hierarchy

if TYPE_CHECKING:
    from storyline.interfaces.filesystem import FileSystem
    from storyline.interfaces.test_io import TestReader
    from storyline.service_layer.project import Project

logger = logging.getLogger(__name__)


def load_hierarchy(
    project: Project, reader: TestReader, filesystem: FileSystem
) -> Hierarchy:
    """Read every test file of `project` into a new hierarchy.

    Args:
        project: Project whose test folder is scanned.
        reader: Reader used for each test file.
        filesystem: Filesystem to walk.

    Returns:
        Hierarchy: Named after the project; empty if the test folder is missing.

    Raises:
        TestParseError: If a test file cannot be read.
        DuplicateNameError: If two files in one directory hold the same test name.
    """
    root = project.get_test_folder()
    hierarchy = Hierarchy(project.name)

    if not filesystem.is_dir(root):
        logger.warning("Test folder %s does not exist; no tests loaded", root)
        return hierarchy

    for dirpath, _dirnames, filenames in filesystem.walk(root):
        relative_dir = os.path.relpath(dirpath, root)
        suite_path = (
            ""
            if relative_dir == os.curdir
            else relative_dir.replace(os.sep, PATH_SEPARATOR)
        )
        container = (
            hierarchy.find_or_create_suite(suite_path) if suite_path else hierarchy
        )

        for filename in filenames:
            if not filename.endswith(TEST_FILE_EXTENSION):
                continue
            test = reader.read_from_file(os.path.join(dirpath, filename))
            test.file_name = None
            container.add_test(test)

            actual = (
                f"{suite_path}{PATH_SEPARATOR}{filename}" if suite_path else filename
            )
            if actual != test.default_file_name:
                test.file_name = actual

    logger.debug(
        "Loaded %d test(s) for project %r from %s",
        sum(1 for _ in hierarchy.all_tests()),
        project.name,
        root,
    )
    return hierarchy
