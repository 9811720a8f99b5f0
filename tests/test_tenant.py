from vastu_client.models import Tenant, TenantPingResponse
from vastu_client.tenant import TenantConfigResolver

from conftest import make_settings


def _resolver(**overrides):
    return TenantConfigResolver(make_settings(**overrides))


def test_defaults_when_no_sources():
    resolver = _resolver(tenant_name="Default")

    assert resolver.resolve_all() == {
        "name": "Default",
        "tenant_id": "tid-default",
        "cloud_name": "default-cloud",
        "upload_preset": "default-preset",
    }
    assert resolver.is_config_loaded is False


def test_empty_sign_in_value_falls_through_to_ping():
    resolver = _resolver(tenant_name="Default")
    resolver.update_ping(TenantPingResponse(name="Acme", tenant_id="t-1", cloud_name="ping-cloud"))
    resolver.update_sign_in(Tenant(name=""))

    assert resolver.resolve("name") == "Acme"


def test_precedence_is_per_field():
    resolver = _resolver()
    resolver.update_ping(TenantPingResponse(name="PingName", tenant_id="t-ping", cloud_name="ping-cloud"))
    resolver.update_sign_in(Tenant(name="SignInName", cloudinary_cloud_name="", cloudinary_preset="signin-preset"))

    assert resolver.name == "SignInName"
    assert resolver.tenant_id == "t-ping"
    assert resolver.cloud_name == "ping-cloud"
    assert resolver.upload_preset == "signin-preset"
    assert resolver.cloudinary_folder == "SignInName"


def test_updates_keep_the_other_source_and_clear_resets():
    resolver = _resolver()
    resolver.update_sign_in(Tenant(name="SignInName", cloudinary_cloud_name="signin-cloud"))
    resolver.update_ping(TenantPingResponse(name="PingName", tenant_id="t-ping", cloud_name="ping-cloud"))

    assert resolver.cloud_name == "signin-cloud"
    assert resolver.tenant_id == "t-ping"

    resolver.clear()

    assert resolver.name == "sampletenant"
    assert resolver.cloud_name == "default-cloud"
    assert resolver.is_config_loaded is False
