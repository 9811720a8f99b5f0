from __future__ import annotations

import logging
from typing import Literal

from vastu_client.config import AppSettings
from vastu_client.models import Tenant, TenantPingResponse

logger = logging.getLogger(__name__)

TenantField = Literal["name", "tenant_id", "cloud_name", "upload_preset"]

TENANT_FIELDS: tuple[TenantField, ...] = ("name", "tenant_id", "cloud_name", "upload_preset")


class TenantConfigResolver:
    def __init__(self, settings: AppSettings):
        self._defaults: dict[TenantField, str] = {
            "name": settings.tenant_name,
            "tenant_id": settings.tenant_id,
            "cloud_name": settings.default_cloud_name,
            "upload_preset": settings.default_upload_preset,
        }
        self._ping: TenantPingResponse | None = None
        self._sign_in: Tenant | None = None

    @property
    def is_config_loaded(self) -> bool:
        return self._ping is not None

    def update_ping(self, config: TenantPingResponse) -> None:
        logger.info("Updating tenant config from ping: name=%s tenant_id=%s", config.name, config.tenant_id)
        self._ping = config

    def update_sign_in(self, tenant: Tenant) -> None:
        logger.info("Updating tenant config from sign-in: name=%s", tenant.name)
        self._sign_in = tenant

    def clear(self) -> None:
        logger.info("Clearing tenant config")
        self._ping = None
        self._sign_in = None

    def resolve(self, field: TenantField) -> str:
        # sign-in, then ping, then defaults; empty strings fall through
        if field not in TENANT_FIELDS:
            raise KeyError(f"Unknown tenant field: {field}")
        for value in (self._sign_in_value(field), self._ping_value(field)):
            if value:
                return value
        return self._defaults[field]

    def resolve_all(self) -> dict[TenantField, str]:
        return {field: self.resolve(field) for field in TENANT_FIELDS}

    @property
    def name(self) -> str:
        return self.resolve("name")

    @property
    def tenant_id(self) -> str:
        return self.resolve("tenant_id")

    @property
    def cloud_name(self) -> str:
        return self.resolve("cloud_name")

    @property
    def upload_preset(self) -> str:
        return self.resolve("upload_preset")

    @property
    def cloudinary_folder(self) -> str:
        return self.name

    def _sign_in_value(self, field: TenantField) -> str | None:
        if self._sign_in is None:
            return None
        if field == "name":
            return self._sign_in.name
        if field == "cloud_name":
            return self._sign_in.cloudinary_cloud_name
        if field == "upload_preset":
            return self._sign_in.cloudinary_preset
        # the sign-in tenant payload carries no tenant id
        return None

    def _ping_value(self, field: TenantField) -> str | None:
        if self._ping is None:
            return None
        if field == "name":
            return self._ping.name
        if field == "tenant_id":
            return self._ping.tenant_id
        if field == "cloud_name":
            return self._ping.cloud_name
        # the ping payload carries no upload preset
        return None
