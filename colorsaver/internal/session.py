import asyncio
from dataclasses import dataclass
from enum import Enum

from colorama import Fore, init

from colorsaver.internal.collection import ColorCollection, ColorRecord
from colorsaver.internal.color_codec import CanonicalColor, from_channels, parse_color
from colorsaver.internal.errors import PersistenceError, ValidationError
from colorsaver.internal.palette import PaletteIndex
from colorsaver.internal.storage import BlobStore
init(autoreset=True)


DEFAULT_STORAGE_KEY = "@saved_colors"


class SessionState(Enum):
    IDLE = "idle"
    EDITING = "editing"


@dataclass(frozen=True)
class CollectionChange:
    event: str
    record: ColorRecord


class SessionController:
    """One user's editing session over the saved-color collection.

    Input events (`enter_text`, `enter_channels`, `set_name`) are synchronous
    and only touch the edit fields. `save` and `delete` go through the store
    one at a time under `_write_lock`, and the in-memory collection is only
    replaced after the store accepted the new blob.
    """

    def __init__(self, palette: PaletteIndex, store: BlobStore, storage_key: str = DEFAULT_STORAGE_KEY):
        self._palette = palette
        self._store = store
        self._storage_key = storage_key
        self._write_lock = asyncio.Lock()

        self._collection = ColorCollection()
        self._loaded = False
        self._changes: list[CollectionChange] = []
        self._edit_generation = 0
        self._reset_inputs()

    def _reset_inputs(self):
        self._state = SessionState.IDLE
        self._input_text = ""
        self._channels: tuple[int, int, int] = (0, 0, 0)
        self._color: CanonicalColor | None = None
        self._name = ""
        self._suggestion: str | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def channels(self) -> tuple[int, int, int]:
        return self._channels

    @property
    def color(self) -> CanonicalColor | None:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def suggestion(self) -> str | None:
        return self._suggestion

    @property
    def palette(self) -> PaletteIndex:
        return self._palette

    @property
    def collection(self) -> ColorCollection:
        return self._collection

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def records(self) -> tuple[ColorRecord, ...]:
        return self._collection.records

    async def load(self) -> ColorCollection:
        async with self._write_lock:
            blob = await self._store.get(self._storage_key)
            collection = ColorCollection.load(blob)
            self._collection = collection
            self._loaded = True
        print(f"[Session] Loaded {len(collection)} saved color(s)")
        return collection

    def enter_text(self, text: str) -> CanonicalColor | None:
        self._edit_generation += 1
        self._state = SessionState.EDITING
        self._input_text = text
        try:
            color = parse_color(text)
        except ValidationError:
            return None
        self._apply_color(color)
        return color

    def enter_channels(self, r: int, g: int, b: int) -> CanonicalColor:
        color = from_channels(r, g, b)
        self._edit_generation += 1
        self._state = SessionState.EDITING
        self._apply_color(color)
        return color

    def set_name(self, name: str):
        self._edit_generation += 1
        self._state = SessionState.EDITING
        self._name = name

    def clear_name(self):
        self.set_name("")

    def _apply_color(self, color: CanonicalColor):
        self._color = color
        self._channels = color.channels
        self._suggestion = self._palette.lookup_exact(color)
        # a name the user typed, or an earlier suggestion, stays until cleared
        if self._suggestion is not None and not self._name.strip():
            self._name = self._suggestion

    async def save(self) -> ColorRecord:
        """Save the current edit, then clear it unless it changed meanwhile.

        Validation happens under the write lock, so a save queued behind
        another one sees the inputs as that one left them.
        """
        async with self._write_lock:
            if not self._name.strip():
                raise ValidationError("Please enter a name for your color")
            if self._color is None:
                raise ValidationError("Please enter a valid hex or rgb() color")

            generation = self._edit_generation
            record = await self._add_locked(self._name, self._color)
            if self._edit_generation == generation:
                self._reset_inputs()
        print(f"[Session] Saved '{record.name}' {record.value}")
        return record

    async def save_color(self, name: str, color_text: str) -> ColorRecord:
        """Save a free-text color directly, leaving the edit fields alone."""
        color = parse_color(color_text)
        async with self._write_lock:
            record = await self._add_locked(name, color)
        print(f"[Session] Saved '{record.name}' {record.value}")
        return record

    async def _add_locked(self, name: str, color: CanonicalColor) -> ColorRecord:
        self._ensure_loaded()
        updated, record = self._collection.add(name, color)
        await self._persist(updated)
        self._collection = updated
        self._changes.append(CollectionChange("saved", record))
        return record

    async def delete(self, record_id: str) -> ColorCollection:
        async with self._write_lock:
            self._ensure_loaded()
            record = self._collection.get(record_id)
            if record is None:
                return self._collection
            updated = self._collection.remove(record_id)
            await self._persist(updated)
            self._collection = updated
            self._changes.append(CollectionChange("deleted", record))
        print(f"[Session] Deleted '{record.name}' {record.value}")
        return updated

    def _ensure_loaded(self):
        if not self._loaded:
            raise PersistenceError("Saved colors were not loaded, refusing to overwrite them")

    async def _persist(self, collection: ColorCollection):
        try:
            await self._store.set(self._storage_key, collection.serialize())
        except PersistenceError:
            print(f"[Session] {Fore.YELLOW}|::| Failed to save colors, keeping previous state")
            raise

    def get_changes(self) -> list[CollectionChange]:
        return self._changes

    def clear_changes(self):
        self._changes = []
