from __future__ import annotations

import logging

from vastu_client.config import AppSettings
from vastu_client.http import HttpClient, NoDataError, decode_model
from vastu_client.models import (
    DeleteResponse,
    GoogleLoginRequest,
    GoogleLoginResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    TenantPingResponse,
)

logger = logging.getLogger(__name__)


class AuthApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def sign_in(self, request: SignInRequest) -> SignInResponse:
        data = self._http_client.post_json(
            self._settings.signin_path,
            request,
            base_url=self._settings.auth_base_url,
        )
        return decode_model(SignInResponse, data)

    def sign_up(self, request: SignUpRequest) -> SignUpResponse:
        data = self._http_client.post_json(
            self._settings.signup_path,
            request,
            base_url=self._settings.auth_base_url,
        )
        return decode_model(SignUpResponse, data)

    def google_login(self, request: GoogleLoginRequest) -> GoogleLoginResponse:
        data = self._http_client.post_json(
            self._settings.google_login_path,
            request,
            base_url=self._settings.auth_base_url,
        )
        return decode_model(GoogleLoginResponse, data)

    def tenant_ping(self, tenant_name: str | None = None) -> TenantPingResponse:
        data = self._http_client.get_json(
            self._settings.tenant_ping_path,
            params={"name": tenant_name or self._settings.tenant_name},
            base_url=self._settings.auth_base_url,
        )
        response = decode_model(TenantPingResponse, data)
        logger.info("Tenant ping: name=%s tenant_id=%s", response.name, response.tenant_id)
        return response

    def delete_account(self) -> DeleteResponse:
        try:
            data = self._http_client.delete_json(self._settings.account_path)
        except NoDataError:
            # 204 / empty body is a confirmed deletion
            return DeleteResponse(success=True)
        return decode_model(DeleteResponse, data)
