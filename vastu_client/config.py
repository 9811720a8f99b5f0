from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import sys

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    pass


VALID_AUTH_PROVIDERS = ("remote", "fake")


@dataclass(frozen=True)
class AppSettings:
    api_base_url: str
    auth_base_url: str
    tenant_name: str
    tenant_id: str
    default_cloud_name: str
    default_upload_preset: str
    timeout_seconds: int
    data_dir: str
    secure_storage: bool
    auth_provider: str
    log_level: str
    signin_path: str = "/smobile/tenant/plogin"
    signup_path: str = "/smobile/rest/signup"
    google_login_path: str = "/smobile/rest/glogin"
    tenant_ping_path: str = "/snode/tenant/ping"
    account_path: str = "/account"
    profile_path: str = "/profile"
    properties_path: str = "/properties"
    rooms_path: str = "/rooms"
    photos_path: str = "/photos"
    room_questions_path: str = "/room"
    remedies_path: str = "/remedies"

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        api_base_url = os.getenv("VASTU_API_BASE_URL", "https://ekshakti-portal.onrender.com").rstrip("/")
        auth_base_url = os.getenv("VASTU_AUTH_BASE_URL", "https://api.wajooba.xyz").rstrip("/")

        tenant_name = os.getenv("VASTU_TENANT_NAME", "marksampletest").strip()
        tenant_id = os.getenv("VASTU_TENANT_ID", "").strip()
        default_cloud_name = os.getenv("VASTU_CLOUD_NAME", "").strip()
        default_upload_preset = os.getenv("VASTU_UPLOAD_PRESET", "qjdp0fft").strip()

        timeout_seconds = int(os.getenv("VASTU_TIMEOUT_SECONDS", "30"))

        default_data_dir = os.path.join(
            os.getenv("LOCALAPPDATA", os.path.expanduser("~")),
            ".vastu_client",
        )
        data_dir = os.getenv("VASTU_DATA_DIR", default_data_dir)
        secure_storage = _str_to_bool(os.getenv("VASTU_SECURE_STORAGE", "true"))
        auth_provider = os.getenv("VASTU_AUTH_PROVIDER", "remote").strip().lower()
        log_level = os.getenv("VASTU_LOG_LEVEL", "INFO").strip().upper()

        path_overrides = {
            field_name: os.getenv(env_name, "").strip()
            for field_name, env_name in _PATH_ENV_NAMES.items()
            if os.getenv(env_name, "").strip()
        }

        settings = AppSettings(
            api_base_url=api_base_url,
            auth_base_url=auth_base_url,
            tenant_name=tenant_name,
            tenant_id=tenant_id,
            default_cloud_name=default_cloud_name,
            default_upload_preset=default_upload_preset,
            timeout_seconds=timeout_seconds,
            data_dir=data_dir,
            secure_storage=secure_storage,
            auth_provider=auth_provider,
            log_level=log_level,
            **path_overrides,
        )
        settings.validate()
        return settings

    @property
    def credentials_path(self) -> str:
        return os.path.join(self.data_dir, "credentials.bin")

    @property
    def preferences_path(self) -> str:
        return os.path.join(self.data_dir, "preferences.json")

    def validate(self) -> None:
        missing = []
        if not self.api_base_url:
            missing.append("VASTU_API_BASE_URL")
        if not self.auth_base_url:
            missing.append("VASTU_AUTH_BASE_URL")
        if not self.tenant_name:
            missing.append("VASTU_TENANT_NAME")
        if not self.data_dir:
            missing.append("VASTU_DATA_DIR")

        if missing:
            raise ConfigurationError(
                "Missing required settings: " + ", ".join(missing)
            )

        invalid_urls = [
            name
            for name, value in (
                ("VASTU_API_BASE_URL", self.api_base_url),
                ("VASTU_AUTH_BASE_URL", self.auth_base_url),
            )
            if not value.startswith(("http://", "https://"))
        ]
        if invalid_urls:
            raise ConfigurationError(
                "Base URLs must start with http:// or https://: " + ", ".join(invalid_urls)
            )

        invalid_paths = [
            env_name
            for field_name, env_name in _PATH_ENV_NAMES.items()
            if not getattr(self, field_name).startswith("/")
        ]
        if invalid_paths:
            raise ConfigurationError(
                "Endpoint paths must start with '/': " + ", ".join(invalid_paths)
            )

        if self.timeout_seconds <= 0:
            raise ConfigurationError("VASTU_TIMEOUT_SECONDS must be greater than 0")

        if self.auth_provider not in VALID_AUTH_PROVIDERS:
            raise ConfigurationError(
                "VASTU_AUTH_PROVIDER must be one of: " + ", ".join(VALID_AUTH_PROVIDERS)
            )


_PATH_ENV_NAMES = {
    "signin_path": "VASTU_SIGNIN_PATH",
    "signup_path": "VASTU_SIGNUP_PATH",
    "google_login_path": "VASTU_GOOGLE_LOGIN_PATH",
    "tenant_ping_path": "VASTU_TENANT_PING_PATH",
    "account_path": "VASTU_ACCOUNT_PATH",
    "profile_path": "VASTU_PROFILE_PATH",
    "properties_path": "VASTU_PROPERTIES_PATH",
    "rooms_path": "VASTU_ROOMS_PATH",
    "photos_path": "VASTU_PHOTOS_PATH",
    "room_questions_path": "VASTU_ROOM_QUESTIONS_PATH",
    "remedies_path": "VASTU_REMEDIES_PATH",
}


def _str_to_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("VASTU_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)

    if getattr(sys, "frozen", False):
        exe_dir = Path(sys.executable).resolve().parent
        candidates.append(exe_dir / file_name)
    else:
        project_root = Path(__file__).resolve().parent.parent
        candidates.append(project_root / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError as exc:
        logger.warning("Could not read env file %s: %s", path, exc)
