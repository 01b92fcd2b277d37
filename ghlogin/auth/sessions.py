"""Database-backed login sessions and their cookies."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ghlogin.auth.models import UserAttributes
from ghlogin.config import Settings, get_settings
from ghlogin.constants import SESSION_COOKIE_NAME, SESSION_ID_ENTROPY_BYTES
from ghlogin.models import Session, User
from ghlogin.utils.logging import get_logger
from ghlogin.utils.secrets import generate_id_from_entropy_size

logger = get_logger(__name__)


@dataclass
class AuthSession:
    """A validated or newly created session."""

    id: str
    user_id: str
    expires_at: datetime
    fresh: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionUser:
    """The user behind a session, as projected by `get_user_attributes`."""

    id: str
    attributes: UserAttributes

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.attributes.model_dump(by_alias=True)}


@dataclass
class SessionCookie:
    """Cookie name, value and `Response.set_cookie` keyword arguments."""

    name: str
    value: str
    attributes: dict[str, Any]


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SQLAlchemyAdapter:
    """Reads and writes sessions and users through an AsyncSession.

    Writes are flushed, committing is left to the caller.
    """

    def __init__(
        self,
        db: AsyncSession,
        session_model: type[Session] = Session,
        user_model: type[User] = User,
    ) -> None:
        self.db = db
        self.session_model = session_model
        self.user_model = user_model

    async def get_session_and_user(
        self, session_id: str
    ) -> tuple[Session | None, User | None]:
        result = await self.db.execute(
            select(self.session_model, self.user_model)
            .join(self.user_model, self.session_model.user_id == self.user_model.id)
            .where(self.session_model.id == session_id)
        )
        row = result.first()
        if row is None:
            return None, None
        return row[0], row[1]

    async def get_user_sessions(self, user_id: str) -> list[Session]:
        result = await self.db.execute(
            select(self.session_model).where(self.session_model.user_id == user_id)
        )
        return list(result.scalars().all())

    async def set_session(
        self,
        session_id: str,
        user_id: str,
        expires_at: datetime,
        attributes: Mapping[str, Any],
    ) -> None:
        self.db.add(
            self.session_model(
                id=session_id,
                user_id=user_id,
                expires_at=expires_at,
                **attributes,
            )
        )
        await self.db.flush()

    async def update_session_expiration(self, session_id: str, expires_at: datetime) -> None:
        await self.db.execute(
            update(self.session_model)
            .where(self.session_model.id == session_id)
            .values(expires_at=expires_at)
        )

    async def delete_session(self, session_id: str) -> None:
        await self.db.execute(
            delete(self.session_model).where(self.session_model.id == session_id)
        )

    async def delete_user_sessions(self, user_id: str) -> None:
        await self.db.execute(
            delete(self.session_model).where(self.session_model.user_id == user_id)
        )

    async def delete_expired_sessions(self) -> int:
        # Loaded rows may carry naive datetimes, so skip in-Python evaluation
        result = await self.db.execute(
            delete(self.session_model)
            .where(self.session_model.expires_at <= datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0


class SessionManager:
    """Creates, validates and invalidates sessions and builds their cookies.

    Sessions are extended to a full lifetime once less than half of it
    remains; such sessions come back with `fresh=True` and the caller should
    send a new cookie.
    """

    def __init__(
        self,
        adapter: SQLAlchemyAdapter,
        *,
        get_user_attributes: Callable[[User], UserAttributes],
        session_expires_in: timedelta = timedelta(days=30),
        cookie_name: str = SESSION_COOKIE_NAME,
        cookie_attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self.adapter = adapter
        self.get_user_attributes = get_user_attributes
        self.session_expires_in = session_expires_in
        self.cookie_name = cookie_name
        self.cookie_attributes = {
            "httponly": True,
            "samesite": "lax",
            "path": "/",
            "secure": True,
            **(cookie_attributes or {}),
        }

    async def create_session(
        self, user_id: str, attributes: Mapping[str, Any]
    ) -> AuthSession:
        """Persist a new session for `user_id`."""
        session_id = generate_id_from_entropy_size(SESSION_ID_ENTROPY_BYTES)
        expires_at = datetime.now(UTC) + self.session_expires_in
        await self.adapter.set_session(session_id, user_id, expires_at, attributes)
        logger.debug(f"Created session for user {user_id}")
        return AuthSession(
            id=session_id,
            user_id=user_id,
            expires_at=expires_at,
            fresh=True,
            attributes=dict(attributes),
        )

    async def validate_session(
        self, session_id: str
    ) -> tuple[AuthSession | None, SessionUser | None]:
        """Look up a session, dropping it if expired and extending it if old."""
        db_session, db_user = await self.adapter.get_session_and_user(session_id)
        if db_session is None or db_user is None:
            return None, None

        now = datetime.now(UTC)
        expires_at = _as_utc(db_session.expires_at)
        if now >= expires_at:
            await self.adapter.delete_session(db_session.id)
            return None, None

        fresh = False
        if now >= expires_at - self.session_expires_in / 2:
            expires_at = now + self.session_expires_in
            await self.adapter.update_session_expiration(db_session.id, expires_at)
            fresh = True

        session = AuthSession(
            id=db_session.id,
            user_id=db_session.user_id,
            expires_at=expires_at,
            fresh=fresh,
        )
        user = SessionUser(id=db_user.id, attributes=self.get_user_attributes(db_user))
        return session, user

    async def get_user_sessions(self, user_id: str) -> list[AuthSession]:
        now = datetime.now(UTC)
        return [
            AuthSession(id=s.id, user_id=s.user_id, expires_at=_as_utc(s.expires_at))
            for s in await self.adapter.get_user_sessions(user_id)
            if _as_utc(s.expires_at) > now
        ]

    async def invalidate_session(self, session_id: str) -> None:
        await self.adapter.delete_session(session_id)

    async def invalidate_user_sessions(self, user_id: str) -> None:
        await self.adapter.delete_user_sessions(user_id)

    async def delete_expired_sessions(self) -> int:
        return await self.adapter.delete_expired_sessions()

    def read_session_cookie(self, cookies: Mapping[str, str]) -> str | None:
        return cookies.get(self.cookie_name) or None

    def create_session_cookie(self, session_id: str) -> SessionCookie:
        """Build the cookie that carries `session_id`."""
        return SessionCookie(
            name=self.cookie_name,
            value=session_id,
            attributes={
                **self.cookie_attributes,
                "max_age": int(self.session_expires_in.total_seconds()),
            },
        )

    def create_blank_session_cookie(self) -> SessionCookie:
        """Build a cookie that clears the session cookie in the browser."""
        return SessionCookie(
            name=self.cookie_name,
            value="",
            attributes={**self.cookie_attributes, "max_age": 0},
        )


def github_user_attributes(user: User) -> UserAttributes:
    """Project a user row onto the attributes exposed with its sessions."""
    return UserAttributes(github_id=user.github_id, username=user.username)


def build_session_manager(
    db: AsyncSession, settings: Settings | None = None
) -> SessionManager:
    """Build a session manager bound to the users and user_sessions tables."""
    settings = settings or get_settings()
    adapter = SQLAlchemyAdapter(db, Session, User)
    return SessionManager(
        adapter,
        get_user_attributes=github_user_attributes,
        session_expires_in=timedelta(days=settings.session_expires_days),
        cookie_attributes={"secure": settings.cookie_secure},
    )
