# edudesk/console/pages/home.py
from typing import Any, Awaitable, Callable, Dict, List, Optional

from edudesk.core.http import ApiClient
from edudesk.console.base import BasePage
from edudesk.console.blocks import button_group, button_item, form, form_field, heading, ui_action
from edudesk.console.flows.login import ROLES, LoginFlow
from edudesk.state.session import SessionContext, SessionUser

ROLE_TABS = {
    "student": ("Student Login", "Student ID", "Access your academic records"),
    "admin": ("Admin Login", "Admin ID", "Access the administrative dashboard"),
}


class HomePage(BasePage):
    name = "home"
    title = "Welcome"

    def __init__(
        self,
        http: ApiClient,
        session: SessionContext,
        on_login: Optional[Callable[[SessionUser], Awaitable[Any]]] = None,
    ):
        super().__init__(http, session)
        self.login = LoginFlow(http, session, on_login=on_login)

    def flows(self):
        return {"login": self.login}

    def action_table(self):
        table = super().action_table()
        table["switch_role"] = lambda payload: self.login.switch_role(payload.get("role"))
        return table

    def render(self) -> List[Dict[str, Any]]:
        flow = self.login
        title, id_label, description = ROLE_TABS[flow.role]
        tabs = button_group([
            button_item(ROLE_TABS[role][0].split()[0], ui_action("switch_role", {"role": role}),
                        variant="primary" if role == flow.role else "outline")
            for role in ROLES
        ])
        return [
            heading("Institution Records Portal", "Sign in to continue"),
            tabs,
            form(
                "login",
                title,
                [
                    form_field("userId", id_label, "text", value=flow.draft.get("userId"), required=True,
                               disabled=flow.is_submitting),
                    form_field("password", "Password", "password", value=None, required=True,
                               disabled=flow.is_submitting),
                ],
                submit_label="Sign In",
                can_submit=flow.can_submit,
                submitting=flow.is_submitting,
                error=flow.error,
                description=description,
            ),
        ]
