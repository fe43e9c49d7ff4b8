"""Global pytest fixtures for STORYLINE."""

pytest_plugins = [
    "tests.fixtures.datagen",
    "tests.fixtures.projects",
]
