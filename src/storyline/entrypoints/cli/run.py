"""``storyline run``: execute one or more test projects.

Behavior
- Loads each project file, reads its test folder into a hierarchy, and runs
  every test (or only those under ``--workspace``) through the grammars of
  ``--fixtures``.
- Writes a JSON result artifact when ``--results-path`` is given.
- Exits with the number of failed plus errored tests (capped at 255), so 0
  means every test passed.

Failure modes
- No project file and no ``STORYLINE_PROJECT`` → usage error.
- Unreadable project or test file, unknown workspace, or an unimportable
  fixtures module → ``ClickException`` with the reason.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from storyline import bootstrap, config

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

MAX_EXIT_STATUS = 255

MISSING_PROJECT_MSG = (
    "No project file given and STORYLINE_PROJECT is not set.\n\n"
    "Pass one or more project files, e.g.:\n"
    "  storyline run specs/shop.proj\n"
    "  or set a default:\n"
    "  export STORYLINE_PROJECT=specs/shop.proj"
)

NO_FIXTURES_WARNING = (
    "No --fixtures module given; every step will error. "
    "Only comment-only tests can pass."
)


def _resolve_workers(workers: int | None) -> int:
    if workers is not None:
        return workers
    try:
        return config.get_max_workers()
    except config.InvalidWorkerCountError as e:
        raise click.BadParameter(str(e), param_hint="--workers") from e


@click.command()
@click.argument(
    "project_files",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--results-path",
    "-r",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="STORYLINE_RESULTS_PATH",
    show_envvar=True,
    help="Write a JSON summary of the run to this file.",
)
@click.option(
    "--workspace",
    "-w",
    default=None,
    envvar="STORYLINE_WORKSPACE",
    show_envvar=True,
    help=(
        "Only run tests under this suite path (e.g. 'shop/checkout'). "
        "Overrides the workspace set in the project files."
    ),
)
@click.option(
    "--fixtures",
    "-f",
    "fixtures_module",
    default=None,
    envvar="STORYLINE_FIXTURES",
    show_envvar=True,
    help="Importable Python module defining a GRAMMARS mapping used to run steps.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help=(
        "Threads used to run the tests of one project. "
        "Defaults to STORYLINE_WORKERS, or 1."
    ),
)
@click.pass_context
def run(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    project_files: tuple[Path, ...],
    results_path: Path | None,
    workspace: str | None,
    fixtures_module: str | None,
    workers: int | None,
) -> None:
    """Run the tests of one or more projects."""

    if not project_files:
        try:
            project_files = (config.get_project_file(),)
        except config.ProjectFileNotSetError as e:
            raise click.UsageError(MISSING_PROJECT_MSG) from e

    max_workers = _resolve_workers(workers)

    if fixtures_module:
        try:
            grammars = bootstrap.load_grammars(fixtures_module)
        except bootstrap.GrammarModuleError as e:
            raise click.ClickException(str(e)) from e
    else:
        warn(NO_FIXTURES_WARNING)
        grammars = {}

    container = bootstrap.build_container()
    try:
        projects = bootstrap.load_projects(project_files, container)
    except bootstrap.ProjectFileError as e:
        raise click.ClickException(str(e)) from e

    if workspace:
        logger.info("Using workspace %s", workspace)

    runner = bootstrap.build_runner(
        projects,
        container,
        grammars=grammars,
        results_path=results_path,
        workspace=workspace,
        max_workers=max_workers,
    )
    try:
        status = runner.execute()
    except (bootstrap.StorylineError, bootstrap.TestParseError) as e:
        raise click.ClickException(str(e)) from e

    report = runner.last_report
    assert report is not None
    counts = report.counts
    if status == 0:
        success(f"All {counts.total} test(s) passed.")
    else:
        error(
            f"{counts.failures} failed, {counts.errors} errored "
            f"out of {counts.total} test(s)."
        )
    if results_path is not None:
        click.echo(f"Results written to {results_path}", err=True)

    ctx.exit(min(status, MAX_EXIT_STATUS))
