from __future__ import annotations

import json
import logging
from typing import Any, Iterable, TypeVar

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from vastu_client.config import AppSettings
from vastu_client.credentials import CredentialStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class NetworkError(RuntimeError):
    pass


class InvalidRequestError(NetworkError):
    pass


class ServerError(NetworkError):
    def __init__(self, status_code: int, message: str, body: str = ""):
        super().__init__(f"Server error ({status_code}): {message}")
        self.status_code = status_code
        self.message = message
        self.body = body


class UnauthorizedError(ServerError):
    pass


class TransportError(NetworkError):
    def __init__(self, underlying: Exception):
        super().__init__(f"Network error: {underlying}")
        self.underlying = underlying


class NoDataError(NetworkError):
    def __init__(self, message: str = "No data received"):
        super().__init__(message)


class DecodingError(NetworkError):
    pass


class HttpClient:
    def __init__(
        self,
        settings: AppSettings,
        credentials: CredentialStore,
        session: requests.Session | None = None,
    ):
        self._settings = settings
        self._credentials = credentials
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        base_url: str | None = None,
        allow_statuses: Iterable[int] = (),
        allow_model: type[BaseModel] | None = None,
    ) -> Any:
        return self.request(
            "GET",
            path,
            params=params,
            base_url=base_url,
            allow_statuses=allow_statuses,
            allow_model=allow_model,
        )

    def post_json(self, path: str, payload: Any, base_url: str | None = None) -> Any:
        return self.request("POST", path, payload=payload, base_url=base_url)

    def put_json(self, path: str, payload: Any, base_url: str | None = None) -> Any:
        return self.request("PUT", path, payload=payload, base_url=base_url)

    def delete_json(self, path: str, base_url: str | None = None) -> Any:
        return self.request("DELETE", path, base_url=base_url)

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        params: dict[str, Any] | None = None,
        base_url: str | None = None,
        allow_statuses: Iterable[int] = (),
        allow_model: type[BaseModel] | None = None,
    ) -> Any:
        url = f"{base_url or self._settings.api_base_url}{path}"
        body = self._serialize(payload) if payload is not None else None

        headers: dict[str, str] = {}
        auth_header = self._credentials.authorization_header()
        if auth_header:
            headers["Authorization"] = auth_header

        logger.info("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=body,
                timeout=self._settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(exc) from exc

        logger.info("%s %s -> %s", method, url, response.status_code)
        return self._handle_response(response, set(allow_statuses), allow_model)

    @staticmethod
    def _serialize(payload: Any) -> str:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            return json.dumps(payload)
        except (TypeError, ValueError) as exc:
            raise InvalidRequestError(f"Invalid request data: {exc}") from exc

    def _handle_response(
        self,
        response: requests.Response,
        allow_statuses: set[int],
        allow_model: type[BaseModel] | None = None,
    ) -> Any:
        text = response.text or ""

        if self._is_html_response(response, text):
            raise UnauthorizedError(
                response.status_code,
                "Received an HTML page instead of JSON; the session is no longer valid",
                text[:500],
            )

        if response.status_code in allow_statuses:
            # a body that does not fit allow_model falls through to the error branch
            parsed = self._parse_json(text)
            if isinstance(parsed, dict) and self._matches(allow_model, parsed):
                return parsed

        if response.status_code >= 400:
            message = self.extract_error_message(text) or f"HTTP {response.status_code}"
            if response.status_code == 401 or self._is_jwt_error(text):
                raise UnauthorizedError(response.status_code, message, text[:500])
            raise ServerError(response.status_code, message, text[:500])

        if not response.content:
            raise NoDataError()

        parsed = self._parse_json(text)
        if parsed is None:
            raise DecodingError(f"Response is not valid JSON: {text[:200]}")
        return parsed

    @staticmethod
    def _matches(model: type[BaseModel] | None, data: dict[str, Any]) -> bool:
        if model is None:
            return True
        try:
            model.model_validate(data)
        except ValidationError:
            return False
        return True

    @staticmethod
    def _parse_json(text: str) -> Any:
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError:
            return None

    @staticmethod
    def _is_html_response(response: requests.Response, text: str) -> bool:
        content_type = response.headers.get("Content-Type", "").lower()
        if "text/html" in content_type:
            return True
        lower = text.lstrip()[:200].lower()
        return lower.startswith("<!doctype html") or lower.startswith("<html")

    @staticmethod
    def _is_jwt_error(text: str) -> bool:
        lower = text.lower()
        if "signature verification failed" in lower:
            return True
        if "jwt" in lower and "signature" in lower and "failed" in lower:
            return True
        return "Not enough or too many segments" in text

    @staticmethod
    def extract_error_message(text: str) -> str:
        """Best-effort user-facing message from an error body.

        Handles ``{"message": ...}``, ``{"error": ...}`` and the identity
        backend's ``{"errors": {"message": "<json or text>"}}`` envelope.
        Falls back to the raw (truncated) body.
        """
        parsed = HttpClient._parse_json(text)
        if not isinstance(parsed, dict):
            return text[:500].strip()

        errors = parsed.get("errors")
        if isinstance(errors, dict) and isinstance(errors.get("message"), str):
            nested_message = errors["message"]
            nested = HttpClient._parse_json(nested_message)
            if isinstance(nested, dict) and isinstance(nested.get("message"), str):
                return nested["message"]
            return nested_message

        for key in ("message", "error", "detail"):
            value = parsed.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

        return text[:500].strip()


def decode_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodingError(f"Failed to decode {model.__name__}: {exc}") from exc


def decode_list(model: type[ModelT], data: Any) -> list[ModelT]:
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        data = data["data"]
    try:
        return TypeAdapter(list[model]).validate_python(data)
    except ValidationError as exc:
        raise DecodingError(f"Failed to decode list of {model.__name__}: {exc}") from exc
