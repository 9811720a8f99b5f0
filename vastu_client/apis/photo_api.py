from __future__ import annotations

from vastu_client.config import AppSettings
from vastu_client.http import HttpClient, decode_model
from vastu_client.models import CreatePhotoRequest, DeleteResponse, PhotoResponse, PhotosResponse


class PhotoApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def add_photo(self, room_id: str, request: CreatePhotoRequest) -> PhotoResponse:
        path = f"{self._settings.rooms_path}/{room_id}/photos/url"
        data = self._http_client.post_json(path, request)
        return decode_model(PhotoResponse, data)

    def list_photos(self, room_id: str) -> PhotosResponse:
        data = self._http_client.get_json(f"{self._settings.rooms_path}/{room_id}/photos")
        return decode_model(PhotosResponse, data)

    def delete_photo(self, photo_id: str) -> DeleteResponse:
        data = self._http_client.delete_json(f"{self._settings.photos_path}/{photo_id}")
        return decode_model(DeleteResponse, data)
