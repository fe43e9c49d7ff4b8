"""Marks everything under `tests/contract/` as `contract`.

Behaviour every adapter of an interface must share.
"""

from pathlib import Path

import pytest

from tests.fixtures.markers import mark_tier

# pylint: disable=unused-argument


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    mark_tier(items, Path(__file__).parent.resolve(), "contract")
