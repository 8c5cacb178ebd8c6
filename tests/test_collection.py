import json

import pytest

from colorsaver.internal.collection import ColorCollection, ColorRecord
from colorsaver.internal.color_codec import parse_hex
from colorsaver.internal.errors import PersistenceError, ValidationError


def test_add_then_remove_round_trips():
    before, _ = ColorCollection().add("Base", parse_hex("#101010"))
    after_add, record = before.add("Sunset", parse_hex("#FF7F50"))
    assert after_add.remove(record.id) == before


def test_remove_unknown_id_is_noop():
    collection, _ = ColorCollection().add("Sunset", parse_hex("#FF7F50"))
    assert collection.remove("does-not-exist") == collection


def test_add_sunset_serialize_and_load():
    collection, record = ColorCollection().add("Sunset", parse_hex("#FF7F50"))
    assert len(collection) == 1
    assert record.name == "Sunset"
    assert str(record.value) == "#FF7F50"
    assert ColorCollection.load(collection.serialize()) == collection


def test_add_rejects_empty_name():
    collection = ColorCollection()
    with pytest.raises(ValidationError):
        collection.add("", parse_hex("#00FF00"))
    with pytest.raises(ValidationError):
        collection.add("   ", parse_hex("#00FF00"))
    assert len(collection) == 0


def test_add_trims_name_and_appends():
    collection, first = ColorCollection().add("  Moss ", parse_hex("#8A9A5B"))
    collection, second = collection.add("Moss", parse_hex("#8A9A5B"))
    assert first.name == "Moss"
    assert [r.id for r in collection] == [first.id, second.id]
    assert first.id != second.id


def test_remove_preserves_order():
    a = ColorRecord(id="1", name="A", value=parse_hex("#111111"))
    b = ColorRecord(id="2", name="B", value=parse_hex("#222222"))
    c = ColorRecord(id="3", name="C", value=parse_hex("#333333"))
    collection = ColorCollection((a, b, c))
    assert collection.remove("1").records == (b, c)
    assert collection.remove("2").records == (a, c)


def test_serialize_shape():
    record = ColorRecord(id="1", name="A", value=parse_hex("#abc"))
    assert json.loads(ColorCollection((record,)).serialize()) == [
        {"id": "1", "name": "A", "value": "#AABBCC"}
    ]


@pytest.mark.parametrize("blob", [None, "", "   "])
def test_load_empty(blob):
    assert len(ColorCollection.load(blob)) == 0


def test_load_drops_malformed_records():
    blob = json.dumps([
        {"id": "1", "name": "Good", "value": "#00ff00"},
        {"id": "2", "name": "Bad", "value": "#GGGGGG"},
    ])
    collection = ColorCollection.load(blob)
    assert len(collection) == 1
    assert collection.records[0].name == "Good"
    assert str(collection.records[0].value) == "#00FF00"


def test_load_drops_incomplete_and_duplicate_records():
    blob = json.dumps([
        {"id": "1", "name": "One", "value": "#010101"},
        {"id": "1", "name": "Clone", "value": "#020202"},
        {"id": "2", "value": "#030303"},
        {"id": 3, "name": "Numeric id", "value": "#040404"},
        {"id": "4", "name": "", "value": "#050505"},
        "junk",
        {"id": "5", "name": "Five", "value": "#abc"},
    ])
    assert [r.id for r in ColorCollection.load(blob)] == ["1", "5"]


def test_load_rejects_unreadable_blob():
    with pytest.raises(PersistenceError):
        ColorCollection.load("{not json")
    with pytest.raises(PersistenceError):
        ColorCollection.load('{"id": "1"}')


def test_load_rejects_deeply_nested_blob():
    with pytest.raises(PersistenceError):
        ColorCollection.load("[" * 100000 + "]" * 100000)
