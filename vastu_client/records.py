from __future__ import annotations

import json
import logging
import uuid

from pydantic import ValidationError

from vastu_client.models import PropertyAddress
from vastu_client.storage import KeyValueStore

logger = logging.getLogger(__name__)

PROPERTY_ADDRESSES_KEY = "savedPropertyAddresses"


class PersistenceError(RuntimeError):
    pass


class LocalRecordStore:
    def __init__(self, store: KeyValueStore):
        self._store = store

    def load_all(self) -> list[PropertyAddress]:
        raw = self._store.get(PROPERTY_ADDRESSES_KEY)
        if raw is None:
            return []

        try:
            items = json.loads(raw) if isinstance(raw, str) else raw
            if not isinstance(items, list):
                raise ValueError("stored addresses are not a list")
            return [PropertyAddress.model_validate(item) for item in items]
        except (ValueError, ValidationError) as exc:
            logger.warning("Error loading addresses from local storage: %s", exc)
            return []

    def save_all(self, records: list[PropertyAddress]) -> None:
        payload = self._encode(records)
        self._store.set(PROPERTY_ADDRESSES_KEY, payload)
        logger.info("Saved %s addresses to local storage", len(records))

    def get(self, record_id: str) -> PropertyAddress | None:
        for record in self.load_all():
            if record.id == record_id:
                return record
        return None

    def has_records(self) -> bool:
        return bool(self.load_all())

    def upsert(self, record: PropertyAddress) -> PropertyAddress:
        # single writer: callers serialize concurrent upserts
        records = self.load_all()

        if record.id:
            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    self.save_all(records)
                    return record

        existing_ids = {existing.id for existing in records}
        new_id = str(uuid.uuid4())
        while new_id in existing_ids:
            new_id = str(uuid.uuid4())

        stored = record.model_copy(update={"id": new_id})
        records.append(stored)
        self.save_all(records)
        return stored

    def delete_by_id(self, record_id: str) -> bool:
        records = self.load_all()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            logger.info("Address with id %s not found in local storage", record_id)
            return False

        self.save_all(remaining)
        return True

    def clear_all(self) -> None:
        self._store.remove(PROPERTY_ADDRESSES_KEY)
        logger.info("Cleared all addresses from local storage")

    @staticmethod
    def _encode(records: list[PropertyAddress]) -> str:
        try:
            return json.dumps([record.to_wire() for record in records])
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Could not serialize addresses: {exc}") from exc
