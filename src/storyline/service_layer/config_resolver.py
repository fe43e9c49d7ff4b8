"""Runtime configuration file discovery.

A project's system under test usually reads its settings from a .NET style
configuration file sitting next to its binaries. `resolve_configuration_file`
looks for one in a directory using a fixed precedence order and returns the
first that exists. Finding none is a legitimate state, not an error.
"""

import logging
import os

from storyline.config import ASSEMBLY_CONFIGURATION_SUFFIX, CONFIGURATION_FILE_CANDIDATES
from storyline.interfaces.filesystem import FileSystem, PathLike

logger = logging.getLogger(__name__)


def configuration_candidates(
    directory: PathLike, assembly_name: str | None = None
) -> list[str]:
    """Return the absolute candidate paths in search order.

    Args:
        directory: Directory to search.
        assembly_name: Name used for the ``<assembly>.dll.config`` candidate.
            Defaults to the directory's own base name.

    Returns:
        ``App.config``, ``app.config``, ``Web.config``, ``web.config`` and
        ``<assembly>.dll.config`` inside `directory`, as absolute paths.
    """
    folder = os.path.abspath(os.fspath(directory))
    if not assembly_name:
        assembly_name = os.path.basename(folder)
    names = [*CONFIGURATION_FILE_CANDIDATES, assembly_name + ASSEMBLY_CONFIGURATION_SUFFIX]
    return [os.path.join(folder, name) for name in names]


def resolve_configuration_file(
    directory: PathLike,
    filesystem: FileSystem,
    assembly_name: str | None = None,
) -> str | None:
    """Find the configuration file that applies to `directory`.

    Args:
        directory: Directory to search.
        filesystem: Filesystem used to probe for candidates.
        assembly_name: See `configuration_candidates`.

    Returns:
        The absolute path of the first existing candidate, or None.
    """
    for candidate in configuration_candidates(directory, assembly_name):
        if filesystem.is_file(candidate):
            logger.debug("Using configuration file %s", candidate)
            return candidate
    logger.debug("No configuration file found in %s", directory)
    return None
