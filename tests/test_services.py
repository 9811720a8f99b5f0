import pytest

from vastu_client.auth import FakeAuthProvider
from vastu_client.models import OnboardingStage, PropertyAddress
from vastu_client.services import build_service

from conftest import make_response


@pytest.fixture
def service(settings, secure_store, preferences, http_client):
    provider = FakeAuthProvider()
    provider.add_user("user@example.test", "secret")
    service = build_service(
        settings=settings,
        secure_store=secure_store,
        preferences=preferences,
        auth_provider=provider,
        http_client=http_client,
    )
    yield service
    service.shutdown()


def test_build_service_wires_components(service, settings):
    assert service.request_timeout_seconds == settings.timeout_seconds
    assert service.session.current_stage() == OnboardingStage.USER_DETAILS
    assert service.tenant.name == "sampletenant"


def test_build_service_restores_persisted_credentials(settings, secure_store, preferences, http_client):
    secure_store.set_many({"auth_token": "saved", "refresh_token": "r"})

    service = build_service(
        settings=settings,
        secure_store=secure_store,
        preferences=preferences,
        auth_provider=FakeAuthProvider(),
        http_client=http_client,
    )
    try:
        assert service.session.is_authenticated
    finally:
        service.shutdown()


def test_ping_tenant_updates_resolver(service, fake_session):
    fake_session.queue(make_response(200, {"name": "Acme", "tenantId": "t-9", "cloudName": "acme"}))

    service.ping_tenant()

    assert service.tenant.tenant_id == "t-9"
    assert service.tenant.is_config_loaded


def test_onboarding_flow(service, fake_session):
    service.session.sign_in("user@example.test", "secret")
    fake_session.queue(
        make_response(200, {"success": True, "data": {"id": "p1", "name": "Asha"}}),
        make_response(200, {"success": True, "data": {"id": "p1", "name": "Asha"}}),
    )

    response = service.submit_user_details("1990-01-01", "Pune", "06:30")
    assert response.success
    assert service.session.current_stage() == OnboardingStage.PROPERTY_ADDRESS
    assert service.session.current_profile.name == "Asha"

    stored = service.save_property_address(
        PropertyAddress(location="Home", complete_address="1 Lake View", pincode="411001")
    )
    assert stored.id
    assert service.records.get(stored.id) == stored
    assert service.session.current_stage() == OnboardingStage.MAIN_CONTENT


def test_failed_profile_creation_keeps_stage(service, fake_session):
    service.session.sign_in("user@example.test", "secret")
    fake_session.queue(make_response(200, {"success": False, "message": "invalid dob"}))

    response = service.submit_user_details("", "Pune", "06:30")

    assert response.success is False
    assert service.session.current_stage() == OnboardingStage.USER_DETAILS


def test_run_executes_api_calls_on_the_runner(service, fake_session):
    fake_session.queue(make_response(200, [{"_id": "m1", "name": "Mirror"}]))

    remedies = service.run(service.remedies.list_remedies)

    assert remedies[0].name == "Mirror"
