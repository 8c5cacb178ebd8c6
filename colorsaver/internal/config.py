import configparser
import os
from colorama import Fore, init

from colorsaver.internal.palette import DEFAULT_PALETTE_PATH
from colorsaver.internal.session import DEFAULT_STORAGE_KEY
init(autoreset=True)


DEFAULT_CONFIG_PATH = "config.ini"


class Config:
    def __init__(self, config_filepath: str = DEFAULT_CONFIG_PATH):
        print(f"[Config] Starting to read '{config_filepath}'")
        config = configparser.ConfigParser(interpolation=None)
        read_ok = config.read(config_filepath, encoding="utf-8")
        if not read_ok:
            print(f"[Config] {Fore.YELLOW}|::| Warning! '{config_filepath}' not found, using defaults")

        if config.has_section("COLORSAVER"):
            section = config["COLORSAVER"]
            self._storage_key: str = section.get("storage_key", DEFAULT_STORAGE_KEY) or DEFAULT_STORAGE_KEY
            self._palette_path: str = section.get("palette", DEFAULT_PALETTE_PATH) or DEFAULT_PALETTE_PATH
        else:
            self._storage_key = DEFAULT_STORAGE_KEY
            self._palette_path = DEFAULT_PALETTE_PATH
        print(f"[Config] Storage key: '{self._storage_key}', palette: '{self._palette_path}'")

        self._storage_path: str | None = None
        if config.has_section("STORAGE"):
            self._storage_path = config["STORAGE"].get("path") or None

        #Load [DATABASE] section
        if config.has_section("DATABASE"):
            try:
                self._db_host = config["DATABASE"]["host"]
                self._db_port = int(config["DATABASE"]["port"])
                self._db_name = config["DATABASE"]["name"]
                self._db_user = config["DATABASE"]["user"]
                self._db_password = config["DATABASE"]["password"]
                self._db_enabled = True
            except (KeyError, ValueError) as e:
                print(f"[Config] {Fore.YELLOW}|::| Warning! DATABASE section is incomplete in {config_filepath}! ({e})")
                self._db_enabled = False
        else:
            self._db_enabled = False

        if self.is_volatile_mode:
            print(f"[Config] {Fore.YELLOW}|::| Warning! Neither DATABASE nor STORAGE configured in {config_filepath}!")
            print(f"[Config] {Fore.YELLOW}|::| Working in VOLATILE mode, saved colors are lost on exit")

        print(f"[Config] Ready")

    @classmethod
    def from_env(cls) -> "Config":
        return cls(os.environ.get("COLORSAVER_CONFIG", DEFAULT_CONFIG_PATH))

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def palette_path(self) -> str:
        return self._palette_path

    @property
    def storage_path(self) -> str | None:
        return self._storage_path

    @property
    def is_volatile_mode(self) -> bool:
        return not self._db_enabled and self._storage_path is None

    @property
    def is_db_configured(self) -> bool:
        return self._db_enabled

    @property
    def db_host(self) -> str:
        return self._db_host

    @property
    def db_port(self) -> int:
        return self._db_port

    @property
    def db_user(self) -> str:
        return self._db_user

    @property
    def db_password(self) -> str:
        return_password = self._db_password or ""
        self._db_password = None
        return return_password

    @property
    def db_name(self) -> str:
        return self._db_name

    def disable_db(self):
        self._db_enabled = False
