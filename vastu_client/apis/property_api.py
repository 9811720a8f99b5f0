from __future__ import annotations

from vastu_client.config import AppSettings
from vastu_client.http import HttpClient, decode_model
from vastu_client.models import (
    CreatePropertyRequest,
    DeleteResponse,
    PropertiesResponse,
    PropertyResponse,
    UpdatePropertyRequest,
)


class PropertyApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _property_path(self, property_id: str) -> str:
        if not property_id.strip():
            raise ValueError("Property id is required")
        return f"{self._settings.properties_path}/{property_id}"

    def list_properties(self) -> PropertiesResponse:
        data = self._http_client.get_json(self._settings.properties_path)
        return decode_model(PropertiesResponse, data)

    def create_property(self, request: CreatePropertyRequest) -> PropertyResponse:
        data = self._http_client.post_json(self._settings.properties_path, request)
        return decode_model(PropertyResponse, data)

    def get_property(self, property_id: str) -> PropertyResponse:
        data = self._http_client.get_json(self._property_path(property_id))
        return decode_model(PropertyResponse, data)

    def update_property(self, property_id: str, request: UpdatePropertyRequest) -> PropertyResponse:
        data = self._http_client.put_json(self._property_path(property_id), request)
        return decode_model(PropertyResponse, data)

    def delete_property(self, property_id: str) -> DeleteResponse:
        data = self._http_client.delete_json(self._property_path(property_id))
        return decode_model(DeleteResponse, data)
