# edudesk/schemas/auth.py
from typing import Any, Literal

from pydantic import BaseModel

Role = Literal["student", "admin"]


class LoginIn(BaseModel):
    userId: str
    password: str
    role: Role


class LoginOut(BaseModel):
    user: dict[str, Any]
