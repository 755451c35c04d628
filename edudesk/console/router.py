# edudesk/console/router.py
from typing import Any, Callable, Dict, Optional

from edudesk.core.http import ApiClient
from edudesk.core.logging import log
from edudesk.console.base import ActionRequest, BasePage, PageResponse
from edudesk.console.pages.admin.dashboard import AdminDashboardPage
from edudesk.console.pages.home import HomePage
from edudesk.console.pages.student.dashboard import StudentDashboardPage
from edudesk.state.session import SessionContext, SessionState, SessionUser

HOME = "/"
STUDENT_DASHBOARD = "/student/dashboard"
ADMIN_DASHBOARD = "/admin/dashboard"

# Role gating is a convenience on top of the locally held session only
ROUTE_ROLES = {
    HOME: None,
    STUDENT_DASHBOARD: "student",
    ADMIN_DASHBOARD: "admin",
}

DASHBOARDS = {
    "student": STUDENT_DASHBOARD,
    "admin": ADMIN_DASHBOARD,
}


class Console:
    """Owns the session and the one mounted page; everything else goes through here."""

    def __init__(self, http: ApiClient, session: SessionContext):
        self.http = http
        self.session = session
        self.route = HOME
        self.page: Optional[BasePage] = None

    def _factories(self) -> Dict[str, Callable[[], BasePage]]:
        return {
            HOME: lambda: HomePage(self.http, self.session, on_login=self._logged_in),
            STUDENT_DASHBOARD: lambda: StudentDashboardPage(self.http, self.session),
            ADMIN_DASHBOARD: lambda: AdminDashboardPage(self.http, self.session),
        }

    async def start(self):
        state = await self.session.load()
        target = HOME
        if state is SessionState.ACTIVE:
            target = DASHBOARDS.get(self.session.role, HOME)
        await self.navigate(target)

    def resolve(self, target: str) -> str:
        if target not in ROUTE_ROLES:
            return HOME
        required = ROUTE_ROLES[target]
        if required and self.session.role != required:
            return HOME
        return target

    async def navigate(self, target: str):
        route = self.resolve(target)
        if route != target:
            log.info("console_redirect", requested=target, route=route, role=self.session.role)
        if self.page:
            self.page.unmount()
        self.route = route
        self.page = self._factories()[route]()
        log.info("console_navigate", route=route)
        await self.page.mount()

    async def _logged_in(self, user: SessionUser):
        await self.navigate(DASHBOARDS[user.role])

    async def logout(self):
        await self.session.sign_out()
        await self.navigate(HOME)

    async def dispatch(self, action: ActionRequest):
        log.info("console_action", route=self.route, action=action.type)
        if action.type == "navigate":
            await self.navigate(action.payload.get("target") or HOME)
        elif action.type == "logout":
            await self.logout()
        else:
            await self.page.handle_action(action.type, action.payload)

    def render(self) -> PageResponse:
        page = self.page
        user = self.session.user
        return PageResponse(
            route=self.route,
            view=getattr(page, "active_view", page.name) if page else "none",
            title=page.title if page else "",
            user=user.model_dump(mode="json") if user else None,
            blocks=page.render() if page else [],
        )
