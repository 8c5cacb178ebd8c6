import json
import uuid
from dataclasses import dataclass
from typing import Iterator

import pydantic
from colorama import Fore, init

from colorsaver.internal.color_codec import CanonicalColor, parse_hex
from colorsaver.internal.errors import PersistenceError, ValidationError
from colorsaver.internal.jsonenchanced import EnhancedJSONEncoder
init(autoreset=True)


@dataclass(frozen=True)
class ColorRecord:
    id: str
    name: str
    value: CanonicalColor


class StoredColorRecord(pydantic.BaseModel):
    """Shape of one record inside the persisted blob."""
    model_config = pydantic.ConfigDict(strict=True)

    id: str
    name: str
    value: str

    @pydantic.field_validator("id", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @pydantic.field_validator("value")
    @classmethod
    def canonical_hex(cls, v: str) -> str:
        return str(parse_hex(v))

    def to_record(self) -> ColorRecord:
        return ColorRecord(id=self.id, name=self.name.strip(), value=parse_hex(self.value))


class ColorCollection:
    """Ordered, immutable sequence of saved colors.

    Every mutation returns a new collection; writing it to a store is up to
    the caller, so a failed write can simply keep the old instance.
    """

    def __init__(self, records: tuple[ColorRecord, ...] = ()):
        self._records: tuple[ColorRecord, ...] = tuple(records)

    @property
    def records(self) -> tuple[ColorRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[ColorRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other):
        if not isinstance(other, ColorCollection):
            return NotImplemented
        return self._records == other._records

    def __repr__(self):
        return f"ColorCollection({list(self._records)!r})"

    def get(self, record_id: str) -> ColorRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def add(self, name: str, color: CanonicalColor) -> tuple["ColorCollection", ColorRecord]:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Please enter a name for your color")

        taken = {record.id for record in self._records}
        record_id = str(uuid.uuid4())
        while record_id in taken:
            record_id = str(uuid.uuid4())

        record = ColorRecord(id=record_id, name=name, value=color)
        return ColorCollection(self._records + (record,)), record

    def remove(self, record_id: str) -> "ColorCollection":
        if self.get(record_id) is None:
            return self
        return ColorCollection(tuple(r for r in self._records if r.id != record_id))

    def serialize(self) -> str:
        return json.dumps(list(self._records), cls=EnhancedJSONEncoder)

    @classmethod
    def load(cls, blob: str | None) -> "ColorCollection":
        """Rebuild a collection from a blob written by `serialize`.

        Records that don't validate (bad color, missing field, duplicate id)
        are dropped and the rest are kept. A blob that isn't a JSON array at
        all raises PersistenceError.
        """
        if blob is None or not blob.strip():
            return cls()

        try:
            raw = json.loads(blob)
        except (ValueError, RecursionError) as e:
            raise PersistenceError(f"Saved colors are not valid JSON: {e}") from e
        if not isinstance(raw, list):
            raise PersistenceError("Saved colors are not a list")

        records: list[ColorRecord] = []
        seen: set[str] = set()
        dropped = 0
        for item in raw:
            try:
                record = StoredColorRecord.model_validate(item).to_record()
            except pydantic.ValidationError:
                dropped += 1
                continue
            if record.id in seen:
                dropped += 1
                continue
            seen.add(record.id)
            records.append(record)

        if dropped:
            print(f"[Collection] {Fore.YELLOW}|::| Warning! Dropped {dropped} corrupt saved color(s)")
        return cls(tuple(records))
