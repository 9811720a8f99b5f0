from __future__ import annotations

import json
import logging
import os
from typing import Any, Mapping, Protocol

from msal_extensions import CrossPlatLock, FilePersistence, build_encrypted_persistence
from msal_extensions.persistence import PersistenceNotFound

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    @property
    def encrypted(self) -> bool:
        ...

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def set_many(self, values: Mapping[str, Any]) -> None:
        ...

    def remove(self, *keys: str) -> None:
        ...

    def clear(self) -> None:
        ...

    def snapshot(self) -> dict[str, Any]:
        ...


class PersistentKeyValueStore:
    def __init__(self, path: str, encrypted: bool = False):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path
        self._persistence, self._encrypted = self._build_persistence(path, encrypted)
        self._lock_path = f"{path}.lockfile"

    @staticmethod
    def _build_persistence(path: str, encrypted: bool):
        if not encrypted:
            return FilePersistence(path), False
        try:
            return build_encrypted_persistence(path), True
        except Exception as exc:
            logger.warning(
                "Encrypted storage unavailable for %s (%s); falling back to a plain file",
                path,
                exc,
            )
            return FilePersistence(path), False

    @property
    def encrypted(self) -> bool:
        return self._encrypted

    @property
    def path(self) -> str:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        with CrossPlatLock(self._lock_path):
            document = self._read()
            document.update(values)
            self._write(document)

    def remove(self, *keys: str) -> None:
        with CrossPlatLock(self._lock_path):
            document = self._read()
            changed = False
            for key in keys:
                if key in document:
                    del document[key]
                    changed = True
            if changed:
                self._write(document)

    def clear(self) -> None:
        with CrossPlatLock(self._lock_path):
            self._persistence.save("")
            if os.path.exists(self._path):
                os.remove(self._path)

    def snapshot(self) -> dict[str, Any]:
        return dict(self._read())

    def _read(self) -> dict[str, Any]:
        try:
            raw = self._persistence.load()
        except PersistenceNotFound:
            return {}

        if not raw:
            return {}

        try:
            document = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable storage document at %s", self._path)
            return {}

        if not isinstance(document, dict):
            logger.warning("Ignoring non-object storage document at %s", self._path)
            return {}
        return document

    def _write(self, document: dict[str, Any]) -> None:
        self._persistence.save(json.dumps(document, sort_keys=True))


class InMemoryKeyValueStore:
    def __init__(self, encrypted: bool = False, initial: Mapping[str, Any] | None = None):
        self._encrypted = encrypted
        self._values: dict[str, Any] = dict(initial or {})

    @property
    def encrypted(self) -> bool:
        return self._encrypted

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        # round-trip through JSON to mimic what a file-backed store accepts
        self._values.update(json.loads(json.dumps(dict(values))))

    def remove(self, *keys: str) -> None:
        for key in keys:
            self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def snapshot(self) -> dict[str, Any]:
        return json.loads(json.dumps(self._values))
