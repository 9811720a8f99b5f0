from __future__ import annotations

import logging
from typing import Protocol
import uuid

from vastu_client.apis import AuthApi
from vastu_client.config import AppSettings, ConfigurationError
from vastu_client.http import InvalidRequestError, NetworkError, ServerError
from vastu_client.models import (
    AuthTokenResponse,
    Contact,
    GoogleLoginRequest,
    SignInRequest,
    SignUpRequest,
)
from vastu_client.tenant import TenantConfigResolver

logger = logging.getLogger(__name__)

DEFAULT_GOOGLE_ORG_ID = "PostFix"


class AuthenticationError(RuntimeError):
    pass


class AuthProvider(Protocol):
    def sign_in(self, email: str, password: str) -> AuthTokenResponse:
        ...

    def sign_up(self, request: SignUpRequest) -> AuthTokenResponse:
        ...

    def google_login(self, id_token: str) -> AuthTokenResponse:
        ...

    def delete_account(self) -> None:
        ...

    def sign_out(self) -> None:
        ...


class RemoteAuthProvider:
    def __init__(self, auth_api: AuthApi, tenant: TenantConfigResolver):
        self._auth_api = auth_api
        self._tenant = tenant

    def sign_in(self, email: str, password: str) -> AuthTokenResponse:
        request = SignInRequest(tid=self._tenant.tenant_id, email=email, password=password)
        try:
            return self._auth_api.sign_in(request)
        except InvalidRequestError:
            raise
        except NetworkError as exc:
            raise AuthenticationError(self._user_message(exc)) from exc

    def sign_up(self, request: SignUpRequest) -> AuthTokenResponse:
        if not request.tenant_id:
            request = request.model_copy(update={"tenant_id": self._tenant.tenant_id})
        try:
            return self._auth_api.sign_up(request)
        except InvalidRequestError:
            raise
        except NetworkError as exc:
            raise AuthenticationError(self._user_message(exc)) from exc

    def google_login(self, id_token: str) -> AuthTokenResponse:
        request = GoogleLoginRequest(
            tid=self._tenant.tenant_id,
            org_id=DEFAULT_GOOGLE_ORG_ID,
            id_token=id_token,
        )
        try:
            return self._auth_api.google_login(request)
        except InvalidRequestError:
            raise
        except NetworkError as exc:
            raise AuthenticationError(self._user_message(exc)) from exc

    def delete_account(self) -> None:
        response = self._auth_api.delete_account()
        if not response.success:
            raise AuthenticationError(response.message or response.error or "Failed to delete account")

    def sign_out(self) -> None:
        logger.info("Remote sign-out needs no backend call")

    @staticmethod
    def _user_message(error: NetworkError) -> str:
        if isinstance(error, ServerError):
            return error.message
        return str(error)


class FakeAuthProvider:
    """In-process test double for the identity backend.

    Users live in memory; tokens are random opaque strings.
    """

    def __init__(self, fail_account_deletion: bool = False):
        self._users: dict[str, dict[str, str]] = {}
        self._current_email: str | None = None
        self.fail_account_deletion = fail_account_deletion

    def add_user(self, email: str, password: str, name: str = "Test User") -> None:
        self._users[email.lower()] = {"email": email, "password": password, "name": name}

    def sign_in(self, email: str, password: str) -> AuthTokenResponse:
        user = self._users.get(email.lower())
        if user is None:
            raise AuthenticationError("User not found")
        if user["password"] != password:
            raise AuthenticationError("Invalid password")
        self._current_email = user["email"]
        return self._issue_tokens(user)

    def sign_up(self, request: SignUpRequest) -> AuthTokenResponse:
        if request.email.lower() in self._users:
            raise AuthenticationError("Email already in use")
        self.add_user(request.email, "", request.name)
        user = self._users[request.email.lower()]
        self._current_email = user["email"]
        response = self._issue_tokens(user)
        return response.model_copy(update={"is_new_profile": True})

    def google_login(self, id_token: str) -> AuthTokenResponse:
        if not id_token:
            raise AuthenticationError("Missing Google ID token")
        email = "test@example.com"
        if email not in self._users:
            self.add_user(email, "", "Test User")
        self._current_email = email
        return self._issue_tokens(self._users[email])

    def delete_account(self) -> None:
        if self.fail_account_deletion:
            raise AuthenticationError("Account deletion failed")
        if self._current_email is None:
            raise AuthenticationError("No user logged in")
        self._users.pop(self._current_email.lower(), None)
        self._current_email = None

    def sign_out(self) -> None:
        self._current_email = None

    @staticmethod
    def _issue_tokens(user: dict[str, str]) -> AuthTokenResponse:
        return AuthTokenResponse(
            access_token=f"fake-access-{uuid.uuid4().hex}",
            refresh_token=f"fake-refresh-{uuid.uuid4().hex}",
            email=user["email"],
            role="student",
            contact=Contact(id=uuid.uuid4().hex, email=user["email"], full_name=user["name"], name=user["name"]),
        )


def build_auth_provider(
    settings: AppSettings,
    auth_api: AuthApi,
    tenant: TenantConfigResolver,
) -> AuthProvider:
    if settings.auth_provider == "remote":
        return RemoteAuthProvider(auth_api, tenant)
    if settings.auth_provider == "fake":
        logger.warning("Using the in-process fake identity provider")
        return FakeAuthProvider()
    raise ConfigurationError(f"Unknown auth provider: {settings.auth_provider}")
