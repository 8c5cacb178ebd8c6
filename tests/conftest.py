import os

import pytest

os.environ["COLORSAVER_CONFIG"] = os.path.join(os.path.dirname(__file__), "no-such-config.ini")

from colorsaver.internal.errors import PersistenceError
from colorsaver.internal.palette import PaletteIndex
from colorsaver.internal.session import SessionController
from colorsaver.internal.storage import BlobStore, VolatileStore


class FlakyStore(BlobStore):
    """In-memory store whose writes (or reads) can be switched to fail."""

    def __init__(self):
        self.blobs: dict[str, str] = {}
        self.fail_get = False
        self.fail_set = False
        self.set_calls = 0

    async def get(self, key):
        if self.fail_get:
            raise PersistenceError("store unavailable")
        return self.blobs.get(key)

    async def set(self, key, blob):
        self.set_calls += 1
        if self.fail_set:
            raise PersistenceError("store unavailable")
        self.blobs[key] = blob


@pytest.fixture
def palette():
    return PaletteIndex.load([
        ("Red", "#FF0000"),
        ("Coral", "#FF7F50"),
        ("Aqua", "#00FFFF"),
        ("Cyan", "#00FFFF"),
    ])


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def controller(palette, store):
    return SessionController(palette, store)


@pytest.fixture
def volatile_store():
    return VolatileStore()
