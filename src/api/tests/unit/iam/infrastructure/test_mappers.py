"""Unit tests for ORM-to-domain mappers."""

from iam.domain.value_objects import OrgKind, Provider
from iam.infrastructure.mappers import to_application, to_auth, to_organization


class TestToOrganization:
    def test_maps_fields(self, org_model):
        org = to_organization(org_model)

        assert org.id.value == org_model.id
        assert org.external_id.value == org_model.external_id
        assert org.kind is OrgKind.STANDARD


class TestToApplication:
    def test_maps_fields_without_keys(self, app_model, org_model):
        app = to_application(app_model, org_model)

        assert app.id.value == app_model.id
        assert app.org.id.value == org_model.id
        assert app.provider is Provider.GOOGLE
        assert app.provider_client_id == "client-123"
        assert app.api_keys == []

    def test_missing_provider_is_unknown(self, app_model, org_model):
        app_model.auth_provider = None

        assert to_application(app_model, org_model).provider is Provider.UNKNOWN


class TestToAuth:
    def test_maps_fields(self, auth_model, user_model):
        auth = to_auth(auth_model, user_model)

        assert auth.id.value == auth_model.id
        assert auth.user.id.value == user_model.id
        assert auth.user.email == "alice@example.com"
        assert auth.provider is Provider.GOOGLE
        assert auth.access_token == "ya29.stored"
        assert auth.refresh_token == ""
        assert auth.token_expiry == auth_model.access_token_expiry
