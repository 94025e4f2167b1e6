"""Unit tests for Supabase Auth admin calls."""

import uuid
from unittest.mock import MagicMock

import pytest

from couponhub.core.exceptions import AlreadyExists, CollaboratorUnavailable
from couponhub.core.roles import UserRole
from couponhub.services import identity_provider


class TestInviteUser:
    @pytest.mark.asyncio
    async def test_returns_auth_user_id(self, mock_supabase):
        auth_id = uuid.uuid4()
        mock_supabase.auth.admin.invite_user_by_email.return_value = MagicMock(
            user=MagicMock(id=str(auth_id))
        )

        result = await identity_provider.invite_user("loja@example.com", {"name": "Loja"})

        assert result == auth_id
        email, options = mock_supabase.auth.admin.invite_user_by_email.call_args[0]
        assert email == "loja@example.com"
        assert options["data"] == {"name": "Loja"}
        assert options["redirect_to"].endswith("/auth/callback")

    @pytest.mark.asyncio
    async def test_already_registered_maps_to_already_exists(self, mock_supabase):
        mock_supabase.auth.admin.invite_user_by_email.side_effect = Exception(
            "A user with this email address has already been registered"
        )

        with pytest.raises(AlreadyExists):
            await identity_provider.invite_user("loja@example.com", {})

    @pytest.mark.asyncio
    async def test_other_failures_map_to_collaborator_unavailable(self, mock_supabase):
        mock_supabase.auth.admin.invite_user_by_email.side_effect = Exception("503 upstream")

        with pytest.raises(CollaboratorUnavailable) as exc_info:
            await identity_provider.invite_user("loja@example.com", {})
        assert exc_info.value.collaborator == "identity"


class TestFindUserIdByEmail:
    @pytest.mark.asyncio
    async def test_matches_email_case_insensitively(self, mock_supabase):
        auth_id = uuid.uuid4()
        mock_supabase.auth.admin.list_users.return_value = [
            MagicMock(email="outra@example.com", id=str(uuid.uuid4())),
            MagicMock(email="Loja@Example.com", id=str(auth_id)),
        ]

        result = await identity_provider.find_user_id_by_email("loja@example.com")
        assert result == auth_id

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self, mock_supabase):
        mock_supabase.auth.admin.list_users.return_value = [
            MagicMock(email=None, id=str(uuid.uuid4())),
        ]

        assert await identity_provider.find_user_id_by_email("loja@example.com") is None

    @pytest.mark.asyncio
    async def test_failure_raises_collaborator_unavailable(self, mock_supabase):
        mock_supabase.auth.admin.list_users.side_effect = Exception("timeout")

        with pytest.raises(CollaboratorUnavailable):
            await identity_provider.find_user_id_by_email("loja@example.com")


class TestUpdateAuthUser:
    @pytest.mark.asyncio
    async def test_set_app_role_writes_app_metadata(self, mock_supabase):
        user_id = uuid.uuid4()

        await identity_provider.set_app_role(user_id, UserRole.ESTABLISHMENT)

        mock_supabase.auth.admin.update_user_by_id.assert_called_once_with(
            str(user_id), {"app_metadata": {"role": "establishment"}}
        )

    @pytest.mark.asyncio
    async def test_update_user_metadata(self, mock_supabase):
        user_id = uuid.uuid4()

        await identity_provider.update_user_metadata(user_id, {"phone": "+55 11 90000-1111"})

        mock_supabase.auth.admin.update_user_by_id.assert_called_once_with(
            str(user_id), {"user_metadata": {"phone": "+55 11 90000-1111"}}
        )

    @pytest.mark.asyncio
    async def test_failure_raises_collaborator_unavailable(self, mock_supabase):
        mock_supabase.auth.admin.update_user_by_id.side_effect = Exception("timeout")

        with pytest.raises(CollaboratorUnavailable):
            await identity_provider.update_user_metadata(uuid.uuid4(), {"name": "X"})
