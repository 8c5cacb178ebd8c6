import configparser
import os
from dataclasses import dataclass
from typing import Iterable

from colorama import Fore, Back, Style, init
from tqdm import tqdm

from colorsaver.internal.color_codec import CanonicalColor, parse_color, parse_hex
from colorsaver.internal.errors import DatasetError, ValidationError
init(autoreset=True)


DEFAULT_PALETTE_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "palettes", "css_colors.ini")


@dataclass(frozen=True)
class PaletteEntry:
    name: str
    hex: CanonicalColor


class PaletteIndex:
    def __init__(self, entries: list[PaletteEntry]):
        self._entries: tuple[PaletteEntry, ...] = tuple(entries)
        self._by_color: dict[CanonicalColor, str] = {}
        for entry in self._entries:
            # first entry in dataset order wins for duplicate colors
            self._by_color.setdefault(entry.hex, entry.name)

    @property
    def entries(self) -> tuple[PaletteEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def load(cls, entries: Iterable[tuple[str, str]]) -> "PaletteIndex":
        """Build an index from raw (name, hex) pairs.

        Raises DatasetError if any hex value is not a valid color, since that
        means the shipped dataset itself is broken.
        """
        parsed: list[PaletteEntry] = []
        for name, hex_text in entries:
            try:
                parsed.append(PaletteEntry(name, parse_hex(hex_text)))
            except ValidationError as e:
                raise DatasetError(f"Palette entry '{name}' has invalid color '{hex_text}'") from e
        return cls(parsed)

    def lookup_exact(self, color: CanonicalColor | str) -> str | None:
        if isinstance(color, str):
            try:
                color = parse_color(color)
            except ValidationError:
                return None
        return self._by_color.get(color)


def read_palette_file(file_path: str) -> list[tuple[str, str]]:
    config = configparser.ConfigParser(interpolation=None)
    config.optionxform = str
    try:
        with open(file_path, encoding="utf-8") as f:
            config.read_file(f)
    except (OSError, configparser.Error) as e:
        print(f"[Palette] {Back.RED + Style.BRIGHT}|!!| ERROR! Couldn't read palette '{file_path}': {e} |!!|")
        raise DatasetError(f"Couldn't read palette '{file_path}'") from e

    if not config.has_section("PALETTE"):
        print(f"[Palette] {Back.RED + Style.BRIGHT}|!!| ERROR! Palette '{file_path}' is missing 'PALETTE' section |!!|")
        raise DatasetError(f"Palette '{file_path}' is missing 'PALETTE' section")

    return [(key, config["PALETTE"][key]) for key in config["PALETTE"]]


def load_palette(file_path: str = DEFAULT_PALETTE_PATH) -> PaletteIndex:
    print(f"[Palette] Loading palette '{file_path}'")
    raw_entries = read_palette_file(file_path)
    index = PaletteIndex.load(tqdm(raw_entries, total=len(raw_entries)))
    if len(index) == 0:
        print(f"[Palette] {Fore.YELLOW}|::| Warning! Palette '{file_path}' is empty, no names will be suggested")
    print(f"[Palette] - {len(index)} named colors loaded")
    return index
