"""Contract tests for IdGenerator implementations."""

import concurrent.futures as cf

import pytest

from storyline.adapters.id_generators import SequentialIdGenerator, ULIDGenerator

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["ulid", "sequential"])
def id_generator(request: pytest.FixtureRequest):
    """Return a fresh IdGenerator for the requested backend."""
    match request.param:
        case "ulid":
            return ULIDGenerator()
        case "sequential":
            return SequentialIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


def test_ids_are_non_empty_strings(id_generator):
    """Every id is a non-empty string."""
    new_id = id_generator.new_id()

    assert isinstance(new_id, str)
    assert new_id


def test_ids_are_unique_and_sorted(id_generator):
    """Successive ids never repeat and sort in creation order."""
    ids = [id_generator.new_id() for _ in range(2_000)]

    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)


def test_ulid_shape():
    """ULIDs are 26 Crockford base32 characters."""
    new_id = ULIDGenerator().new_id()

    assert len(new_id) == 26
    assert set(new_id) <= set("0123456789ABCDEFGHJKMNPQRSTVWXYZ")


def test_ulid_unique_under_threads():
    """Concurrent callers never receive the same ULID."""
    generator = ULIDGenerator()
    with cf.ThreadPoolExecutor(max_workers=8) as ex:
        ids = list(ex.map(lambda _: generator.new_id(), range(4_000)))

    assert len(set(ids)) == len(ids)


def test_sequential_format():
    """Sequential ids are zero-padded with a prefix."""
    generator = SequentialIdGenerator(prefix="r", width=3)

    assert [generator.new_id() for _ in range(2)] == ["r001", "r002"]
