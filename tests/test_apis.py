import pytest

from vastu_client.apis import AuthApi, PhotoApi, ProfileApi, PropertyApi, RemedyApi, RoomApi
from vastu_client.http import ServerError
from vastu_client.models import (
    CreatePhotoRequest,
    CreateProfileRequest,
    CreateRoomRequest,
    RoomAnswerItem,
    SignInRequest,
)

from conftest import make_response


def test_check_profile_404_means_no_profile(settings, http_client, fake_session):
    fake_session.queue(make_response(404, {"success": False, "message": "not found"}))

    response = ProfileApi(settings, http_client).check_profile()

    assert response.success is False
    assert response.exists is False
    assert response.message == "not found"
    assert fake_session.last_call["url"] == "https://api.example.test/profile"


def test_check_profile_404_with_foreign_body_is_server_error(settings, http_client, fake_session):
    fake_session.queue(make_response(404, {"message": "Route not found"}))

    with pytest.raises(ServerError) as excinfo:
        ProfileApi(settings, http_client).check_profile()

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Route not found"


def test_check_profile_existing(settings, http_client, fake_session):
    body = {"success": True, "data": {"id": "p1", "name": "Asha", "dob": "1990-01-01"}}
    fake_session.queue(make_response(200, body))

    response = ProfileApi(settings, http_client).check_profile()

    assert response.exists
    assert response.data.name == "Asha"


def test_check_profile_server_failure_propagates(settings, http_client, fake_session):
    fake_session.queue(make_response(500, {"message": "boom"}))

    with pytest.raises(ServerError):
        ProfileApi(settings, http_client).check_profile()


def test_create_profile_posts_details(settings, http_client, fake_session):
    fake_session.queue(make_response(200, {"success": True, "data": {"id": "p1"}}))

    ProfileApi(settings, http_client).create_profile(
        CreateProfileRequest(dob="1990-01-01", place_of_birth="Pune", time_of_birth="06:30")
    )

    assert fake_session.last_call["method"] == "POST"
    assert fake_session.last_json() == {
        "dob": "1990-01-01",
        "place_of_birth": "Pune",
        "time_of_birth": "06:30",
    }


def test_property_paths(settings, http_client, fake_session):
    api = PropertyApi(settings, http_client)
    fake_session.queue(
        make_response(200, {"success": True, "data": []}),
        make_response(200, {"success": True, "message": "deleted"}),
    )

    assert api.list_properties().data == []
    assert api.delete_property("prop-1").success

    urls = [call["url"] for call in fake_session.calls]
    assert urls == [
        "https://api.example.test/properties",
        "https://api.example.test/properties/prop-1",
    ]


def test_property_id_is_required(settings, http_client):
    with pytest.raises(ValueError):
        PropertyApi(settings, http_client).get_property("  ")


def test_room_endpoints(settings, http_client, fake_session):
    api = RoomApi(settings, http_client)
    room = {"id": "r1", "name": "Kitchen", "room_type": "kitchen", "property_id": "prop-1"}
    fake_session.queue(
        make_response(200, {"success": True, "data": room}),
        make_response(200, {"success": True, "data": [{"id": "q1", "question": "Facing?", "type": "choice"}], "count": 1}),
        make_response(200, {"success": True, "message": "saved"}),
    )

    created = api.create_room("prop-1", CreateRoomRequest(name="Kitchen", type="kitchen"))
    questions = api.get_questions("r1")
    api.submit_answers("r1", [RoomAnswerItem(question_id="q1", answer="North")])

    assert created.data.type == "kitchen"
    assert questions.count == 1
    assert [call["url"] for call in fake_session.calls] == [
        "https://api.example.test/properties/prop-1/rooms",
        "https://api.example.test/room/questions/r1",
        "https://api.example.test/room/r1/questions",
    ]
    assert fake_session.last_json() == {"answers": [{"question_id": "q1", "answer": "North"}]}


def test_vastu_score_percentage(settings, http_client, fake_session):
    fake_session.queue(make_response(200, {"success": True, "data": {"room_id": "r1", "score": 30, "maxScore": 40}}))

    response = RoomApi(settings, http_client).get_vastu_score("r1")

    assert fake_session.last_call["url"] == "https://api.example.test/room/r1/vastuscore"
    assert response.data.display_percentage == 75.0


def test_add_photo_posts_url(settings, http_client, fake_session):
    photo = {"id": "ph1", "room_id": "r1", "photo_url": "https://img.example.test/a.jpg"}
    fake_session.queue(make_response(200, {"success": True, "data": photo}))

    response = PhotoApi(settings, http_client).add_photo(
        "r1", CreatePhotoRequest(cloud_name="demo", uri="https://img.example.test/a.jpg")
    )

    assert response.data.id == "ph1"
    assert fake_session.last_call["url"] == "https://api.example.test/rooms/r1/photos/url"


def test_list_remedies_passes_filters(settings, http_client, fake_session):
    fake_session.queue(make_response(200, [{"_id": "m1", "name": "Mirror", "roomType": "bedroom"}]))

    remedies = RemedyApi(settings, http_client).list_remedies(room_type="bedroom", issue_type="")

    assert fake_session.last_call["params"] == {"roomType": "bedroom"}
    assert remedies[0].room_type == "bedroom"


def test_sign_in_uses_identity_host(settings, http_client, fake_session):
    body = {
        "access_token": "a",
        "refresh_token": "r",
        "email": "user@example.test",
        "tenant": {"name": "Acme", "cloudinaryCloudName": "acme-cloud"},
    }
    fake_session.queue(make_response(200, body))

    response = AuthApi(settings, http_client).sign_in(
        SignInRequest(tid="tid-default", email="user@example.test", password="pw")
    )

    assert fake_session.last_call["url"] == "https://auth.example.test/smobile/tenant/plogin"
    assert fake_session.last_json()["authType"] == "email"
    assert response.tenant.cloudinary_cloud_name == "acme-cloud"


def test_tenant_ping(settings, http_client, fake_session):
    fake_session.queue(make_response(200, {"name": "Acme", "tenantId": "t-1", "cloudName": "acme"}))

    response = AuthApi(settings, http_client).tenant_ping()

    assert fake_session.last_call["params"] == {"name": "sampletenant"}
    assert response.tenant_id == "t-1"


def test_delete_account_empty_body_is_success(settings, http_client, fake_session):
    fake_session.queue(make_response(204))

    response = AuthApi(settings, http_client).delete_account()

    assert response.success is True
    assert fake_session.last_call["method"] == "DELETE"
    assert fake_session.last_call["url"] == "https://api.example.test/account"
