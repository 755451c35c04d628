# edudesk/console/flows/login.py
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from edudesk.core.errors import ResponseFormatError
from edudesk.core.http import ApiClient
from edudesk.console.flows.form import FormFlow
from edudesk.console.resources import LOGIN
from edudesk.schemas.auth import LoginOut
from edudesk.state.session import SessionContext, SessionUser

ROLES = ("student", "admin")


class LoginFlow(FormFlow):
    """Student/admin login tabs; switching tabs starts from an empty form."""

    failure_message = "Login failed. Please try again later."

    def __init__(
        self,
        http: ApiClient,
        session: SessionContext,
        on_login: Optional[Callable[[SessionUser], Awaitable[Any]]] = None,
    ):
        super().__init__(http, LOGIN, on_success=self._logged_in)
        self.session = session
        self.on_login = on_login
        self.user: Optional[SessionUser] = None
        self.switch_role("student")

    @property
    def role(self) -> str:
        return self.draft.get("role") or "student"

    def switch_role(self, role: str) -> bool:
        if role not in ROLES or self.is_submitting:
            return False
        self.open_create({"userId": "", "password": "", "role": role})
        return True

    def set_field(self, name: str, value: Any) -> bool:
        # The role comes from the selected tab only
        if name == "role":
            return False
        return super().set_field(name, value)

    async def after_success(self, result: Any, payload: Dict[str, Any]):
        try:
            login = LoginOut.model_validate(result)
        except ValidationError as e:
            raise ResponseFormatError("Login response did not include a user.") from e
        self.user = await self.session.sign_in(login.user, payload["role"])

    async def _logged_in(self):
        if self.on_login and self.user:
            await self.on_login(self.user)
