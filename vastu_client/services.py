from __future__ import annotations

from concurrent.futures import Future
import logging
from typing import Any, Callable

from vastu_client.apis import AuthApi, PhotoApi, ProfileApi, PropertyApi, RemedyApi, RoomApi
from vastu_client.auth import AuthProvider, build_auth_provider
from vastu_client.config import AppSettings
from vastu_client.credentials import CredentialStore
from vastu_client.http import HttpClient
from vastu_client.logging_utils import configure_logging
from vastu_client.models import (
    CreateProfileRequest,
    PropertyAddress,
    ProfileResponse,
    TenantPingResponse,
)
from vastu_client.records import LocalRecordStore
from vastu_client.session import SessionManager
from vastu_client.storage import KeyValueStore, PersistentKeyValueStore
from vastu_client.tasks import Dispatch, TaskRunner
from vastu_client.tenant import TenantConfigResolver

logger = logging.getLogger(__name__)


class VastuService:
    def __init__(
        self,
        settings: AppSettings,
        credentials: CredentialStore,
        records: LocalRecordStore,
        tenant: TenantConfigResolver,
        session: SessionManager,
        auth_api: AuthApi,
        profile_api: ProfileApi,
        property_api: PropertyApi,
        room_api: RoomApi,
        photo_api: PhotoApi,
        remedy_api: RemedyApi,
        runner: TaskRunner,
    ):
        self._settings = settings
        self.credentials = credentials
        self.records = records
        self.tenant = tenant
        self.session = session
        self.auth_api = auth_api
        self.profiles = profile_api
        self.properties = property_api
        self.rooms = room_api
        self.photos = photo_api
        self.remedies = remedy_api
        self._runner = runner

    @property
    def request_timeout_seconds(self) -> int:
        return self._settings.timeout_seconds

    def submit(
        self,
        call: Callable[..., Any],
        *args: Any,
        on_success: Callable[[Any], None] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
        owner: Any = None,
        **kwargs: Any,
    ) -> Future:
        return self._runner.submit(
            call,
            *args,
            on_success=on_success,
            on_error=on_error,
            owner=owner,
            **kwargs,
        )

    def run(self, call: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        return self._runner.run(call, *args, **kwargs)

    def ping_tenant(self) -> TenantPingResponse:
        response = self.auth_api.tenant_ping(self._settings.tenant_name)
        self.tenant.update_ping(response)
        return response

    def submit_user_details(self, dob: str, place_of_birth: str, time_of_birth: str) -> ProfileResponse:
        response = self.profiles.create_profile(
            CreateProfileRequest(dob=dob, place_of_birth=place_of_birth, time_of_birth=time_of_birth)
        )
        if response.success:
            self.session.complete_user_details()
            self.session.load_profile()
        return response

    def save_property_address(self, address: PropertyAddress) -> PropertyAddress:
        stored = self.records.upsert(address)
        self.session.complete_property_address()
        return stored

    def shutdown(self) -> None:
        self._runner.shutdown(wait=False)


def build_service(
    settings: AppSettings | None = None,
    secure_store: KeyValueStore | None = None,
    preferences: KeyValueStore | None = None,
    auth_provider: AuthProvider | None = None,
    http_client: HttpClient | None = None,
    dispatch: Dispatch | None = None,
) -> VastuService:
    settings = settings or AppSettings.from_env()
    configure_logging(settings.log_level)

    secure_store = secure_store or PersistentKeyValueStore(settings.credentials_path, encrypted=settings.secure_storage)
    preferences = preferences or PersistentKeyValueStore(settings.preferences_path, encrypted=False)
    if settings.secure_storage and not secure_store.encrypted:
        logger.warning("Credentials are stored without platform encryption")

    credentials = CredentialStore(secure_store)
    credentials.load()
    records = LocalRecordStore(preferences)
    tenant = TenantConfigResolver(settings)

    http_client = http_client or HttpClient(settings, credentials)
    auth_api = AuthApi(settings, http_client)
    profile_api = ProfileApi(settings, http_client)
    auth_provider = auth_provider or build_auth_provider(settings, auth_api, tenant)

    session = SessionManager(
        credentials=credentials,
        records=records,
        tenant=tenant,
        auth_provider=auth_provider,
        profile_api=profile_api,
        preferences=preferences,
        secure_store=secure_store,
    )

    return VastuService(
        settings=settings,
        credentials=credentials,
        records=records,
        tenant=tenant,
        session=session,
        auth_api=auth_api,
        profile_api=profile_api,
        property_api=PropertyApi(settings, http_client),
        room_api=RoomApi(settings, http_client),
        photo_api=PhotoApi(settings, http_client),
        remedy_api=RemedyApi(settings, http_client),
        runner=TaskRunner(dispatch=dispatch),
    )
