from __future__ import annotations

import logging
from typing import Any, Callable

from vastu_client.apis import ProfileApi
from vastu_client.auth import AuthenticationError, AuthProvider
from vastu_client.credentials import CredentialStore
from vastu_client.models import (
    AuthState,
    AuthTokenResponse,
    OnboardingStage,
    ProfileData,
    SessionEvent,
    SessionEventType,
    SignUpRequest,
)
from vastu_client.records import LocalRecordStore
from vastu_client.storage import KeyValueStore
from vastu_client.tenant import TenantConfigResolver

logger = logging.getLogger(__name__)

USER_DETAILS_FLAG = "hasCompletedUserDetails"
PROPERTY_ADDRESS_FLAG = "hasCompletedPropertyAddress"

SessionObserver = Callable[[SessionEvent], None]


def derive_stage(user_details_done: bool, property_address_done: bool) -> OnboardingStage:
    if not user_details_done:
        return OnboardingStage.USER_DETAILS
    if not property_address_done:
        return OnboardingStage.PROPERTY_ADDRESS
    return OnboardingStage.MAIN_CONTENT


class SessionManager:
    """Authentication state, onboarding progress and the sign-out/reset flows.

    The two onboarding flags live in the preferences store and are the only
    source of truth for the stage; nothing keeps a separate in-memory copy.
    Must be driven from a single execution context.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        records: LocalRecordStore,
        tenant: TenantConfigResolver,
        auth_provider: AuthProvider,
        profile_api: ProfileApi,
        preferences: KeyValueStore,
        secure_store: KeyValueStore,
    ):
        self._credentials = credentials
        self._records = records
        self._tenant = tenant
        self._auth_provider = auth_provider
        self._profile_api = profile_api
        self._preferences = preferences
        self._secure_store = secure_store
        self._observers: list[SessionObserver] = []
        self._current_profile: ProfileData | None = None

    # observation

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, event_type: SessionEventType, **details: Any) -> None:
        event = SessionEvent(
            type=event_type,
            is_authenticated=self.is_authenticated,
            stage=self.current_stage(),
            details=details,
        )
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("Session observer failed for %s", event_type.value)

    # state

    @property
    def is_authenticated(self) -> bool:
        return self._credentials.is_authenticated

    @property
    def current_profile(self) -> ProfileData | None:
        return self._current_profile

    @property
    def has_completed_user_details(self) -> bool:
        return bool(self._preferences.get(USER_DETAILS_FLAG, False))

    @property
    def has_completed_property_address(self) -> bool:
        return bool(self._preferences.get(PROPERTY_ADDRESS_FLAG, False))

    def current_stage(self) -> OnboardingStage:
        return derive_stage(self.has_completed_user_details, self.has_completed_property_address)

    def restore(self) -> AuthState:
        self._credentials.load()
        return self._auth_state()

    def complete_user_details(self) -> OnboardingStage:
        return self._complete_step(USER_DETAILS_FLAG)

    def complete_property_address(self) -> OnboardingStage:
        return self._complete_step(PROPERTY_ADDRESS_FLAG)

    def _complete_step(self, flag: str) -> OnboardingStage:
        before = self.current_stage()
        if not self._preferences.get(flag, False):
            self._preferences.set(flag, True)
        after = self.current_stage()
        if after != before:
            logger.info("Onboarding stage %s -> %s", before.value, after.value)
            self._notify(SessionEventType.STAGE_CHANGED, previous=before.value)
        return after

    def check_user_status(self) -> OnboardingStage:
        # cached addresses can only move the stage forward, never back
        if self.has_completed_user_details and not self.has_completed_property_address:
            if self._records.has_records():
                return self.complete_property_address()
        return self.current_stage()

    # authentication

    def sign_in(self, email: str, password: str) -> AuthState:
        try:
            response = self._auth_provider.sign_in(email, password)
        except AuthenticationError as exc:
            logger.info("Sign in failed: %s", exc)
            return AuthState(is_signed_in=False, error=str(exc))
        return self._accept_tokens(response)

    def sign_up(self, request: SignUpRequest) -> AuthState:
        try:
            response = self._auth_provider.sign_up(request)
        except AuthenticationError as exc:
            logger.info("Sign up failed: %s", exc)
            return AuthState(is_signed_in=False, error=str(exc))
        return self._accept_tokens(response)

    def google_login(self, id_token: str) -> AuthState:
        try:
            response = self._auth_provider.google_login(id_token)
        except AuthenticationError as exc:
            logger.info("Google login failed: %s", exc)
            return AuthState(is_signed_in=False, error=str(exc))
        return self._accept_tokens(response)

    def _accept_tokens(self, response: AuthTokenResponse) -> AuthState:
        self._credentials.store(response.access_token, response.refresh_token)
        if response.tenant is not None:
            self._tenant.update_sign_in(response.tenant)
        logger.info("Signed in as %s", response.email)
        self._notify(SessionEventType.SIGNED_IN, email=response.email)
        return self._auth_state(response.email)

    def _auth_state(self, username: str | None = None) -> AuthState:
        if not self.is_authenticated:
            return AuthState(is_signed_in=False)
        return AuthState(
            is_signed_in=True,
            username=username,
            tenant_id=self._tenant.tenant_id or None,
        )

    # profile

    def load_profile(self) -> ProfileData | None:
        if not self.is_authenticated:
            logger.info("Not authenticated, skipping profile check")
            self._set_profile(None)
            return None

        response = self._profile_api.check_profile()
        self._set_profile(response.data if response.exists else None)
        return self._current_profile

    def _set_profile(self, profile: ProfileData | None) -> None:
        if profile == self._current_profile:
            return
        self._current_profile = profile
        self._notify(SessionEventType.PROFILE_CHANGED, has_profile=profile is not None)

    # teardown

    def sign_out(self) -> None:
        self._auth_provider.sign_out()
        self._credentials.clear()
        self._preferences.remove(USER_DETAILS_FLAG, PROPERTY_ADDRESS_FLAG)
        self._records.clear_all()
        self._current_profile = None
        logger.info("Signed out")
        self._notify(SessionEventType.SIGNED_OUT)

    def reset_to_fresh_state(self) -> None:
        self._clear_everything()
        logger.info("Reset to fresh state")
        self._notify(SessionEventType.RESET)

    def delete_account(self) -> None:
        # any failure propagates untouched and leaves local state as it was
        self._auth_provider.delete_account()
        self._clear_everything()
        logger.info("Account deleted and local data cleared")
        self._notify(SessionEventType.ACCOUNT_DELETED)

    def _clear_everything(self) -> None:
        self._auth_provider.sign_out()
        self._credentials.clear()
        self._records.clear_all()
        self._current_profile = None
        self._tenant.clear()
        self._preferences.clear()
        self._secure_store.clear()
