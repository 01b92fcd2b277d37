"""Local user accounts linked to GitHub identities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ghlogin.auth.models import GitHubUser
from ghlogin.constants import USER_ID_ENTROPY_BYTES
from ghlogin.models import User
from ghlogin.utils.logging import get_logger
from ghlogin.utils.secrets import generate_id_from_entropy_size

logger = get_logger(__name__)


async def get_user_by_github_id(db: AsyncSession, github_id: int) -> User | None:
    result = await db.execute(select(User).where(User.github_id == github_id))
    return result.scalar_one_or_none()


async def get_or_create_github_user(db: AsyncSession, github_user: GitHubUser) -> User:
    """Return the user linked to `github_user`, creating it on first login.

    Existing users are returned untouched. If a concurrent login inserted
    the same GitHub id first, that row wins and is returned instead.
    """
    user = await get_user_by_github_id(db, github_user.id)
    if user:
        return user

    user = User(
        id=generate_id_from_entropy_size(USER_ID_ENTROPY_BYTES),
        github_id=github_user.id,
        username=github_user.login,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        existing = await get_user_by_github_id(db, github_user.id)
        if existing is None:
            raise
        logger.info(f"GitHub user {github_user.id} was created concurrently, reusing it")
        return existing

    logger.info(f"Created user {user.id} for GitHub user {github_user.login}")
    return user
