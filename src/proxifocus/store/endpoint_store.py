from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from proxifocus.domain.models import Endpoint, clean_url, decode_endpoints, encode_endpoints
from proxifocus.store.kv import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

ENDPOINTS_KEY = "endpoints_key"


class EndpointStore:
    """Owns the ordered endpoint list and keeps one storage slot in sync with it.

    Every mutating call has persisted the full list by the time it returns.
    Nothing here raises on bad input, unknown ids or storage trouble: those
    are logged and the in-memory list stays authoritative.
    """

    def __init__(self, storage: KeyValueStore, key: str = ENDPOINTS_KEY):
        self.storage = storage
        self.key = key
        self._endpoints: list[Endpoint] = []

    # ----------------------------
    # Persistence
    # ----------------------------

    def load(self) -> list[Endpoint]:
        try:
            blob = self.storage.get(self.key)
        except StorageError as exc:
            logger.error("Error reading endpoints: %s", exc)
            self._endpoints = []
            return self.list()

        if blob is None:
            self._endpoints = []
            return self.list()

        try:
            self._endpoints = decode_endpoints(blob)
        except ValidationError as exc:
            logger.warning("Error decoding endpoints, starting empty: %s", exc)
            self._endpoints = []
        return self.list()

    def save(self) -> None:
        try:
            self.storage.set(self.key, encode_endpoints(self._endpoints))
        except StorageError as exc:
            logger.error("Error saving endpoints: %s", exc)

    # ----------------------------
    # Operations
    # ----------------------------

    def add(self, raw_url: str) -> Optional[Endpoint]:
        url = clean_url(raw_url)
        if url is None:
            logger.debug("Ignoring invalid url %r", raw_url)
            return None
        endpoint = Endpoint(url=url)
        self._endpoints.append(endpoint)
        self.save()
        return endpoint

    def toggle(self, endpoint_id: str) -> Optional[Endpoint]:
        idx = self._index_of(endpoint_id)
        if idx is None:
            logger.debug("toggle: no endpoint with id %s", endpoint_id)
            return None
        current = self._endpoints[idx]
        updated = current.model_copy(update={"enabled": not current.enabled})
        self._endpoints[idx] = updated
        self.save()
        return updated

    def remove(self, endpoint_id: str) -> Optional[Endpoint]:
        idx = self._index_of(endpoint_id)
        if idx is None:
            logger.debug("remove: no endpoint with id %s", endpoint_id)
            return None
        removed = self._endpoints.pop(idx)
        self.save()
        return removed

    def list(self) -> list[Endpoint]:
        return list(self._endpoints)

    def get(self, endpoint_id: str) -> Optional[Endpoint]:
        idx = self._index_of(endpoint_id)
        return self._endpoints[idx] if idx is not None else None

    def enabled(self) -> list[Endpoint]:
        return [e for e in self._endpoints if e.enabled]

    def _index_of(self, endpoint_id: str) -> Optional[int]:
        for i, e in enumerate(self._endpoints):
            if e.id == endpoint_id:
                return i
        return None
