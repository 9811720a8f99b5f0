from __future__ import annotations

import logging

from vastu_client.logging_utils import mask_token
from vastu_client.models import Credential
from vastu_client.storage import KeyValueStore

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "auth_token"
REFRESH_TOKEN_KEY = "refresh_token"


class TokenError(RuntimeError):
    pass


class CredentialStore:
    def __init__(self, store: KeyValueStore):
        self._store = store
        self._credential: Credential | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None and bool(self._credential.access_token)

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def store(self, access_token: str, refresh_token: str) -> None:
        if self._credential is not None:
            logger.info("Replacing stored credentials")
        self._store.set_many(
            {
                ACCESS_TOKEN_KEY: access_token,
                REFRESH_TOKEN_KEY: refresh_token,
            }
        )
        self._credential = Credential(access_token=access_token, refresh_token=refresh_token)
        logger.info("Stored credentials (access token %s)", mask_token(access_token))

    def load(self) -> Credential | None:
        access_token = self._store.get(ACCESS_TOKEN_KEY)
        refresh_token = self._store.get(REFRESH_TOKEN_KEY)
        if not access_token:
            self._credential = None
            logger.info("No stored credentials found")
            return None

        self._credential = Credential(
            access_token=str(access_token),
            refresh_token=str(refresh_token or ""),
        )
        logger.info("Loaded stored credentials")
        return self._credential

    def clear(self) -> None:
        self._store.remove(ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)
        self._credential = None
        logger.info("Cleared credentials")

    def authorization_header(self) -> str | None:
        # read through to storage so every component sees the latest persisted token
        token = self._store.get(ACCESS_TOKEN_KEY)
        if not token:
            return None
        return f"Bearer {token}"

    def refresh_if_needed(self) -> bool:
        # the backend has no refresh endpoint; never rotates, always False
        if self._credential is None or not self._credential.refresh_token:
            raise TokenError("No refresh token available")
        logger.info("Token refresh is not supported by the backend; keeping current tokens")
        return False
