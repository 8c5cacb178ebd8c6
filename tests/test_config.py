import mysql.connector

from colorsaver.internal.config import Config
from colorsaver.internal.palette import DEFAULT_PALETTE_PATH
from colorsaver.internal.session import DEFAULT_STORAGE_KEY
from colorsaver.internal.shared_state import SharedState
from colorsaver.internal.storage import FileStore, VolatileStore


def write_config(tmp_path, text):
    path = tmp_path / "config.ini"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_missing_file_uses_defaults(tmp_path):
    conf = Config(str(tmp_path / "missing.ini"))
    assert conf.storage_key == DEFAULT_STORAGE_KEY
    assert conf.palette_path == DEFAULT_PALETTE_PATH
    assert conf.is_volatile_mode
    assert isinstance(SharedState.create_store(conf), VolatileStore)


def test_storage_section_selects_file_store(tmp_path):
    path = write_config(tmp_path, f"[COLORSAVER]\nstorage_key = mine\n\n[STORAGE]\npath = {tmp_path / 'colors.json'}\n")
    conf = Config(path)
    assert conf.storage_key == "mine"
    assert not conf.is_volatile_mode
    assert isinstance(SharedState.create_store(conf), FileStore)


def test_incomplete_database_section(tmp_path):
    conf = Config(write_config(tmp_path, "[DATABASE]\nhost = localhost\n"))
    assert not conf.is_db_configured
    assert conf.is_volatile_mode


def test_database_password_is_read_once(tmp_path):
    conf = Config(write_config(tmp_path, "[DATABASE]\nhost = h\nport = 3306\nname = n\nuser = u\npassword = secret\n"))
    assert conf.is_db_configured
    assert conf.db_port == 3306
    assert conf.db_password == "secret"
    assert conf.db_password == ""


def test_unreachable_database_falls_back_to_file(tmp_path, monkeypatch):
    def refuse(**kwargs):
        raise mysql.connector.Error("refused")

    monkeypatch.setattr(mysql.connector, "connect", refuse)
    conf = Config(write_config(
        tmp_path,
        f"[DATABASE]\nhost = h\nport = 3306\nname = n\nuser = u\npassword = p\n\n[STORAGE]\npath = {tmp_path / 'c.json'}\n",
    ))
    assert isinstance(SharedState.create_store(conf), FileStore)
    assert not conf.is_db_configured


def test_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("COLORSAVER_CONFIG", write_config(tmp_path, "[COLORSAVER]\nstorage_key = env-key\n"))
    assert Config.from_env().storage_key == "env-key"
