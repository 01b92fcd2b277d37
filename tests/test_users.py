"""Tests for linking GitHub identities to local users."""

from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ghlogin.auth import users
from ghlogin.auth.models import GitHubUser
from ghlogin.auth.users import get_or_create_github_user
from ghlogin.models import User


class TestGetOrCreateGitHubUser:
    """Tests for get_or_create_github_user."""

    @pytest.mark.asyncio
    async def test_creates_user(self, db_session: AsyncSession):
        """Test a first login creates a user with a 16 character id."""
        user = await get_or_create_github_user(db_session, GitHubUser(id=10, login="mona"))

        assert user.github_id == 10
        assert user.username == "mona"
        assert len(user.id) == 16

    @pytest.mark.asyncio
    async def test_existing_user_not_updated(self, db_session: AsyncSession, test_user: User):
        """Test an existing user is returned even if the login changed."""
        user = await get_or_create_github_user(db_session, GitHubUser(id=1001, login="renamed"))

        assert user.id == test_user.id
        assert user.username == "octocat"
        count = await db_session.execute(select(func.count()).select_from(User))
        assert count.scalar_one() == 1

    @pytest.mark.asyncio
    async def test_generated_ids_are_unique(self, db_session: AsyncSession):
        """Test many new users never share an id."""
        ids = set()
        for github_id in range(1, 51):
            user = await get_or_create_github_user(
                db_session, GitHubUser(id=github_id, login=f"user{github_id}")
            )
            ids.add(user.id)
        assert len(ids) == 50

    @pytest.mark.asyncio
    async def test_concurrent_first_login(self, db_session: AsyncSession, test_user: User):
        """Test the loser of an insert race gets the winner's row."""
        real_lookup = users.get_user_by_github_id
        calls = []

        async def lookup_missing_first(db, github_id):
            calls.append(github_id)
            if len(calls) == 1:
                return None
            return await real_lookup(db, github_id)

        with patch.object(users, "get_user_by_github_id", side_effect=lookup_missing_first):
            user = await get_or_create_github_user(db_session, GitHubUser(id=1001, login="octocat"))

        assert user.id == test_user.id
        assert calls == [1001, 1001]
        count = await db_session.execute(select(func.count()).select_from(User))
        assert count.scalar_one() == 1
