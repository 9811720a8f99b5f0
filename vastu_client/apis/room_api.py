from __future__ import annotations

import logging

from vastu_client.config import AppSettings
from vastu_client.http import HttpClient, NoDataError, decode_model
from vastu_client.models import (
    CreateRoomRequest,
    RoomAnswerItem,
    RoomData,
    RoomQuestionsResponse,
    RoomResponse,
    RoomsResponse,
    RoomVastuScoreResponse,
    SubmitRoomAnswersRequest,
    SubmitRoomAnswersResponse,
    UpdateRoomRequest,
)

logger = logging.getLogger(__name__)


class RoomApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def create_room(self, property_id: str, request: CreateRoomRequest) -> RoomResponse:
        path = f"{self._settings.properties_path}/{property_id}/rooms"
        data = self._http_client.post_json(path, request)
        return decode_model(RoomResponse, data)

    def list_rooms(self, property_id: str) -> RoomsResponse:
        path = f"{self._settings.properties_path}/{property_id}/rooms"
        data = self._http_client.get_json(path)
        response = decode_model(RoomsResponse, data)
        logger.info("Fetched %s rooms for property %s", len(response.data or []), property_id)
        return response

    def get_room(self, room_id: str) -> RoomResponse:
        data = self._http_client.get_json(f"{self._settings.rooms_path}/{room_id}")
        return decode_model(RoomResponse, data)

    def get_room_details(self, room_id: str) -> RoomData:
        response = self.get_room(room_id)
        if response.data is None:
            raise NoDataError(f"Room data not found for room {room_id}")
        return response.data

    def update_room(self, room_id: str, request: UpdateRoomRequest) -> RoomResponse:
        data = self._http_client.put_json(f"{self._settings.rooms_path}/{room_id}", request)
        return decode_model(RoomResponse, data)

    def get_questions(self, room_id: str) -> RoomQuestionsResponse:
        path = f"{self._settings.room_questions_path}/questions/{room_id}"
        data = self._http_client.get_json(path)
        return decode_model(RoomQuestionsResponse, data)

    def submit_answers(self, room_id: str, answers: list[RoomAnswerItem]) -> SubmitRoomAnswersResponse:
        path = f"{self._settings.room_questions_path}/{room_id}/questions"
        data = self._http_client.post_json(path, SubmitRoomAnswersRequest(answers=answers))
        return decode_model(SubmitRoomAnswersResponse, data)

    def get_vastu_score(self, room_id: str) -> RoomVastuScoreResponse:
        path = f"{self._settings.room_questions_path}/{room_id}/vastuscore"
        data = self._http_client.get_json(path)
        response = decode_model(RoomVastuScoreResponse, data)
        logger.info(
            "Room %s vastu score %.1f/%.1f (%.1f%%)",
            room_id,
            response.data.score,
            response.data.max_score,
            response.data.display_percentage,
        )
        return response
