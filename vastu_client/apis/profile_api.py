from __future__ import annotations

import logging

from vastu_client.config import AppSettings
from vastu_client.http import HttpClient, decode_model
from vastu_client.models import CreateProfileRequest, ProfileResponse, UpdateProfileRequest

logger = logging.getLogger(__name__)

PROFILE_NOT_FOUND_STATUS = 404


class ProfileApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def check_profile(self) -> ProfileResponse:
        # a 404 with a JSON body means "no profile yet", not a failure
        data = self._http_client.get_json(
            self._settings.profile_path,
            allow_statuses=(PROFILE_NOT_FOUND_STATUS,),
            allow_model=ProfileResponse,
        )
        response = decode_model(ProfileResponse, data)
        if not response.exists:
            logger.info("No profile for current user: %s", response.message or "unknown")
        return response

    def create_profile(self, request: CreateProfileRequest) -> ProfileResponse:
        data = self._http_client.post_json(self._settings.profile_path, request)
        return decode_model(ProfileResponse, data)

    def update_profile(self, request: UpdateProfileRequest) -> ProfileResponse:
        data = self._http_client.put_json(self._settings.profile_path, request)
        return decode_model(ProfileResponse, data)
