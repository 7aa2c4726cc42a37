"""Unit tests for AuthRepository."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from iam.domain.value_objects import Provider
from iam.infrastructure.auth_repository import AuthRepository
from iam.infrastructure.mappers import to_auth
from iam.infrastructure.observability import AuthRepositoryProbe
from iam.ports.repositories import IAuthRepository
from infrastructure.database.exceptions import DatabaseError


@pytest.fixture
def mock_session():
    return AsyncMock()


@pytest.fixture
def mock_probe():
    return create_autospec(AuthRepositoryProbe, instance=True)


@pytest.fixture
def repository(mock_session, mock_probe):
    return AuthRepository(session=mock_session, probe=mock_probe)


def _first(row):
    result = MagicMock()
    result.first.return_value = row
    return result


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IAuthRepository)


class TestFindByAccessToken:
    @pytest.mark.asyncio
    async def test_returns_auth_with_user(
        self, repository, mock_session, auth_model, user_model
    ):
        mock_session.execute.return_value = _first((auth_model, user_model))

        auth = await repository.find_by_access_token("ya29.stored")

        assert auth is not None
        assert auth.id.value == auth_model.id
        assert auth.user.id.value == user_model.id

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, repository, mock_session, mock_probe
    ):
        mock_session.execute.return_value = _first(None)

        assert await repository.find_by_access_token("unknown") is None
        mock_probe.auth_not_found.assert_called_once_with(
            lookup="find_by_access_token"
        )


class TestFindByProviderPersonId:
    @pytest.mark.asyncio
    async def test_filters_on_provider_and_person_id(
        self, repository, mock_session, auth_model, user_model
    ):
        mock_session.execute.return_value = _first((auth_model, user_model))

        await repository.find_by_provider_person_id(Provider.GOOGLE, "109876543210")

        stmt = mock_session.execute.call_args[0][0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "auth.provider =" in sql
        assert "auth.provider_person_id =" in sql

    @pytest.mark.asyncio
    async def test_query_failure_raises_database_error(self, repository, mock_session):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception())

        with pytest.raises(DatabaseError) as exc_info:
            await repository.find_by_provider_person_id(Provider.GOOGLE, "x")

        assert exc_info.value.operation == "find_by_provider_person_id"


class TestUpdateToken:
    @pytest.mark.asyncio
    async def test_issues_update(
        self, repository, mock_session, mock_probe, auth_model, user_model
    ):
        auth = to_auth(auth_model, user_model)
        auth.refresh("ya29.new", datetime.now(UTC) + timedelta(hours=1), "client-9")

        await repository.update_token(auth)

        stmt = mock_session.execute.call_args[0][0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert sql.startswith("UPDATE auth SET")
        assert "access_token=" in sql
        mock_probe.auth_token_updated.assert_called_once_with(auth.id.value)

    @pytest.mark.asyncio
    async def test_failure_raises_database_error(
        self, repository, mock_session, auth_model, user_model
    ):
        mock_session.execute.side_effect = OperationalError("UPDATE", {}, Exception())

        with pytest.raises(DatabaseError):
            await repository.update_token(to_auth(auth_model, user_model))
