# edudesk/state/session.py
import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from redis.exceptions import RedisError

from edudesk.core.config import settings
from edudesk.core.errors import InvalidSessionError, MissingSessionError, SessionError
from edudesk.core.logging import log
from edudesk.core.redis import get_redis
from edudesk.schemas.auth import Role


class SessionUser(BaseModel):
    """The logged-in user object as returned by /api/login, plus the role used."""
    model_config = ConfigDict(extra="allow")

    role: Role
    student_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or ("Admin User" if self.role == "admin" else "Student")


class SessionState(str, Enum):
    ABSENT = "absent"
    INVALID = "invalid"
    ACTIVE = "active"


class MemorySessionStore:
    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._value = initial

    async def load(self) -> Optional[str]:
        return json.dumps(self._value) if self._value is not None else None

    async def save(self, value: Dict[str, Any]):
        self._value = value

    async def clear(self):
        self._value = None


class FileSessionStore:
    """JSON file kept between runs, the local-storage of a headless console."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    async def save(self, value: Dict[str, Any]):
        self.path.write_text(json.dumps(value), encoding="utf-8")

    async def clear(self):
        self.path.unlink(missing_ok=True)


class RedisSessionStore:
    def __init__(self, key: str, redis_url: Optional[str] = None):
        self.key = key
        self.redis_url = redis_url

    def _key(self) -> str:
        return f"edudesk_session:{self.key}"

    async def load(self) -> Optional[str]:
        r = await get_redis(self.redis_url)
        return await r.get(self._key())

    async def save(self, value: Dict[str, Any]):
        r = await get_redis(self.redis_url)
        await r.set(self._key(), json.dumps(value))

    async def clear(self):
        r = await get_redis(self.redis_url)
        await r.delete(self._key())


def build_session_store(backend: Optional[str] = None):
    backend = (backend or settings.SESSION_BACKEND).lower()
    if backend == "memory":
        return MemorySessionStore()
    if backend == "redis":
        return RedisSessionStore(settings.SESSION_KEY)
    if backend == "file":
        return FileSessionStore(settings.SESSION_FILE)
    raise ValueError(f"Unknown session backend: {backend}")


class SessionContext:
    """Typed access to the persisted user identity.

    Views get this injected instead of reading storage themselves. The
    ``require_*`` accessors fail fast with a ``SessionError`` whose message is
    ready to display.
    """

    def __init__(self, store):
        self.store = store
        self.state = SessionState.ABSENT
        self._user: Optional[SessionUser] = None

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def role(self) -> Optional[str]:
        return self._user.role if self._user else None

    async def load(self) -> SessionState:
        raw = await self.store.load()
        if raw is None:
            self._set(SessionState.ABSENT, None)
            return self.state

        try:
            self._set(SessionState.ACTIVE, SessionUser.model_validate(json.loads(raw)))
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            log.warning("session_invalid", error=str(e), error_type=type(e).__name__)
            self._set(SessionState.INVALID, None)
        return self.state

    async def sign_in(self, user: Dict[str, Any], role: str) -> SessionUser:
        try:
            session_user = SessionUser.model_validate({**user, "role": role})
        except ValidationError as e:
            log.warning("session_user_invalid", role=role, error=str(e))
            raise InvalidSessionError("The server returned an unusable user record.") from e
        try:
            await self.store.save(session_user.model_dump(mode="json"))
        except (OSError, RedisError) as e:
            log.error("session_save_failed", error=str(e), error_type=type(e).__name__)
            raise SessionError("Could not save your session. Please try again.") from e
        self._set(SessionState.ACTIVE, session_user)
        log.info("session_signed_in", role=role, student_id=session_user.student_id)
        return session_user

    async def sign_out(self):
        await self.store.clear()
        self._set(SessionState.ABSENT, None)
        log.info("session_signed_out")

    def require_user(self) -> SessionUser:
        if self.state is SessionState.INVALID:
            raise InvalidSessionError()
        if self._user is None:
            raise MissingSessionError()
        return self._user

    def require_student_id(self) -> str:
        user = self.require_user()
        if not user.student_id:
            raise InvalidSessionError("Could not find student ID. Please log in again.", field="student_id")
        return user.student_id

    def _set(self, state: SessionState, user: Optional[SessionUser]):
        self.state = state
        self._user = user
