"""STORYLINE

Project model, test persistence and run orchestration for hierarchical
acceptance tests. Tests are organised into nested suites, stored one file per
test under a project's test folder, and executed project by project to a
single pass/fail exit status.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
