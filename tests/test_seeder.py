from colorsaver.internal.color_codec import parse_color
from colorsaver.seeder import random_payload


def test_payloads_are_valid_colors():
    for i in range(20):
        payload = random_payload(i)
        assert payload["name"] == f"Seed {i}"
        parse_color(payload["color"])


def test_payloads_alternate_encodings():
    assert random_payload(1)["color"].startswith("rgb(")
    assert random_payload(2)["color"].startswith("#")
