import asyncio
import json
import os
from abc import ABC, abstractmethod

import mysql.connector
from colorama import Fore, init

from colorsaver.internal.errors import PersistenceError
init(autoreset=True)


class BlobStore(ABC):
    """Async get/set of text blobs by key. Failures raise PersistenceError."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    async def set(self, key: str, blob: str):
        ...

    def close(self):
        pass


class VolatileStore(BlobStore):
    def __init__(self):
        self._blobs: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    async def set(self, key: str, blob: str):
        self._blobs[key] = blob


class FileStore(BlobStore):
    """All keys live in one JSON object on disk, rewritten on every set."""

    def __init__(self, file_path: str):
        self._file_path = file_path
        print(f"[Storage] Using file '{file_path}'")

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self._file_path):
            return {}
        try:
            with open(self._file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Couldn't read '{self._file_path}': {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"'{self._file_path}' does not hold a key-value object")
        return data

    def _write(self, key: str, blob: str):
        data = self._read_all()
        data[key] = blob
        tmp_path = self._file_path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self._file_path)
        except OSError as e:
            raise PersistenceError(f"Couldn't write '{self._file_path}': {e}") from e

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(lambda: self._read_all().get(key))

    async def set(self, key: str, blob: str):
        await asyncio.to_thread(self._write, key, blob)


class MySQLStore(BlobStore):
    """Blobs in a `blob_store (store_key VARCHAR PRIMARY KEY, blob MEDIUMTEXT)` table."""

    def __init__(self, host, port, user, password, database):
        print("[Storage] Connecting to MySQL...")
        try:
            self._connection = mysql.connector.connect(
                host=host,
                port=port,
                user=user,
                password=password,
                database=database
            )
        except mysql.connector.Error as err:
            print(f"[Storage] {Fore.YELLOW}|::| Failed to connect to DB {user}@{host}: {err}")
            raise PersistenceError(f"Failed to connect to DB {user}@{host}") from err

        if not self._connection.is_connected():
            print(f"[Storage] {Fore.YELLOW}|::| Failed to connect to DB {user}@{host}!")
            raise PersistenceError(f"Failed to connect to DB {user}@{host}")

        print(f"[Storage] Connected to DB {user}@{host}!")
        self._create_table()

    def _create_table(self):
        cursor = self._connection.cursor()
        try:
            query = ("CREATE TABLE IF NOT EXISTS blob_store ("
                     "store_key VARCHAR(255) PRIMARY KEY, "
                     "`blob` MEDIUMTEXT NOT NULL)")
            cursor.execute(query)
            self._connection.commit()
        except mysql.connector.Error as e:
            raise PersistenceError(f"Failed to create blob_store table: {e}") from e
        finally:
            cursor.close()

    def close(self):
        if self._connection:
            self._connection.close()
            print("[Storage] Closed connection to DB")
            self._connection = None

    def _get(self, key: str) -> str | None:
        cursor = self._connection.cursor()
        try:
            query = "SELECT `blob` FROM blob_store WHERE store_key = %s"
            cursor.execute(query, (key,))
            row = cursor.fetchone()
            return row[0] if row else None
        except mysql.connector.Error as e:
            print(f"[Storage] Failed to read '{key}': {e}")
            raise PersistenceError(f"Failed to read '{key}'") from e
        finally:
            cursor.close()

    def _set(self, key: str, blob: str):
        cursor = self._connection.cursor()
        try:
            query = ("INSERT INTO blob_store (store_key, `blob`) VALUES (%s, %s) "
                     "ON DUPLICATE KEY UPDATE `blob` = VALUES(`blob`)")
            cursor.execute(query, (key, blob))
            self._connection.commit()
            print(f"[Storage] Wrote '{key}' ({len(blob)} bytes)")
        except mysql.connector.Error as e:
            print(f"[Storage] Failed to write '{key}': {e}")
            raise PersistenceError(f"Failed to write '{key}'") from e
        finally:
            cursor.close()

    async def get(self, key: str) -> str | None:
        if not self._connection:
            raise PersistenceError("DB connection is closed")
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, blob: str):
        if not self._connection:
            raise PersistenceError("DB connection is closed")
        await asyncio.to_thread(self._set, key, blob)
