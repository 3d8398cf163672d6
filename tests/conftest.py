import itertools

import pytest

from depotfs import InMemoryAdapter

_names = itertools.count()


@pytest.fixture
def fs():
    """A running in-memory filesystem with a unique instance name."""
    filesystem = InMemoryAdapter.configure(name=f"test-fs-{next(_names)}")
    filesystem.start()
    yield filesystem
    filesystem.stop()
