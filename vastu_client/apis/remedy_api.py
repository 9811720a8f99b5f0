from __future__ import annotations

from typing import Any

from vastu_client.config import AppSettings
from vastu_client.http import HttpClient, decode_list, decode_model
from vastu_client.models import Remedy


class RemedyApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def list_remedies(
        self,
        room_type: str | None = None,
        issue_type: str | None = None,
    ) -> list[Remedy]:
        params: dict[str, Any] = {}
        if room_type:
            params["roomType"] = room_type
        if issue_type:
            params["issueType"] = issue_type

        data = self._http_client.get_json(self._settings.remedies_path, params=params or None)
        return decode_list(Remedy, data)

    def get_remedy(self, remedy_id: str) -> Remedy:
        data = self._http_client.get_json(f"{self._settings.remedies_path}/{remedy_id}")
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        return decode_model(Remedy, data)
