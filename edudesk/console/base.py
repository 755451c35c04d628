# edudesk/console/base.py
import inspect
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from edudesk.core.errors import UnknownActionError
from edudesk.core.http import ApiClient
from edudesk.console.blocks import (
    button, confirmation, empty_state, error_block, form, form_field, loading_block, notice, ui_action
)
from edudesk.console.flows.delete import DeleteFlow
from edudesk.console.flows.form import FormFlow
from edudesk.console.synchronizer import RemoteState
from edudesk.state.session import SessionContext

Block = Dict[str, Any]
# (key, input type, select options or None)
FieldSpec = Tuple[str, str, Optional[List[Dict[str, Any]]]]


class ActionRequest(BaseModel):
    type: str
    payload: Dict[str, Any] = {}


class PageResponse(BaseModel):
    route: str
    view: str
    title: str
    user: Optional[Dict[str, Any]] = None
    blocks: List[Block] = []

    model_config = ConfigDict(extra="allow")


class BasePage:
    """One screen: owns its remote sections and dialogs, renders them as blocks."""

    name = "page"
    title = ""

    def __init__(self, http: ApiClient, session: SessionContext):
        self.http = http
        self.session = session
        self.mounted = False

    def remotes(self) -> Sequence[RemoteState]:
        return ()

    def flows(self) -> Dict[str, FormFlow]:
        return {}

    async def mount(self):
        self.mounted = True
        await self.on_mount()

    async def on_mount(self):
        pass

    def unmount(self):
        self.mounted = False
        for remote in self.remotes():
            remote.unmount()
        for flow in self.flows().values():
            flow.detach()

    def render(self) -> List[Block]:
        return []

    def action_table(self) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
        return {
            "set_field": self._set_field,
            "submit": self._submit,
            "cancel": self._cancel,
        }

    async def handle_action(self, action_type: str, payload: Dict[str, Any]):
        handler = self.action_table().get(action_type)
        if handler is None:
            raise UnknownActionError(action_type, self.name)
        result = handler(payload)
        if inspect.isawaitable(result):
            await result

    def _flow(self, payload: Dict[str, Any]) -> FormFlow:
        name = payload.get("form")
        flow = self.flows().get(name)
        if flow is None:
            raise UnknownActionError(f"form:{name}", self.name)
        return flow

    def _set_field(self, payload: Dict[str, Any]):
        flow = self._flow(payload)
        field_name = payload.get("field")
        if not isinstance(field_name, str) or not field_name:
            raise UnknownActionError("set_field without a field", self.name)
        flow.set_field(field_name, payload.get("value"))

    async def _submit(self, payload: Dict[str, Any]):
        await self._flow(payload).submit()

    def _cancel(self, payload: Dict[str, Any]):
        self._flow(payload).cancel()


class DashboardPage(BasePage):
    """A home screen hosting sub-views; only the active sub-view is mounted."""

    def __init__(self, http: ApiClient, session: SessionContext):
        super().__init__(http, session)
        self.active_view = "home"
        self.child: Optional[BasePage] = None

    def child_factories(self) -> Dict[str, Callable[[], BasePage]]:
        return {}

    async def show(self, payload: Dict[str, Any]):
        view = payload.get("view")
        factory = self.child_factories().get(view)
        if factory is None:
            raise UnknownActionError(f"show:{view}", self.name)
        if self.child:
            self.child.unmount()
        self.child = factory()
        self.active_view = view
        await self.child.mount()

    def back(self, payload: Optional[Dict[str, Any]] = None):
        # Plain state change, home keeps whatever it already loaded
        if self.child:
            self.child.unmount()
        self.child = None
        self.active_view = "home"

    def action_table(self):
        table = super().action_table()
        table.update({"show": self.show, "back": self.back})
        return table

    async def handle_action(self, action_type: str, payload: Dict[str, Any]):
        if self.child is not None and action_type not in ("show", "back"):
            await self.child.handle_action(action_type, payload)
            return
        await super().handle_action(action_type, payload)

    def unmount(self):
        if self.child:
            self.child.unmount()
        super().unmount()

    def render(self) -> List[Block]:
        if self.child is not None:
            return [back_button()] + self.child.render()
        return self.render_home()

    def render_home(self) -> List[Block]:
        return []


def render_section(
    remote: RemoteState,
    populated: Callable[[], List[Block]],
    *,
    has_data: bool,
    loading: str,
    empty: str,
    retry: Optional[Dict[str, Any]] = None,
) -> List[Block]:
    """Loading, error, empty or populated; each remote section on its own.

    A failed refresh with earlier data keeps that data on screen under the
    error banner.
    """
    blocks: List[Block] = []
    if remote.error:
        blocks.append(error_block(remote.error, retry=retry or ui_action("refresh")))
    if has_data:
        blocks.extend(populated())
    elif not remote.loaded and not remote.error:
        blocks.append(loading_block(loading))
    elif remote.loaded:
        blocks.append(empty_state(empty))
    return blocks


def render_form(name: str, flow: FormFlow, title: str, fields: Sequence[FieldSpec],
                submit_label: str, description: Optional[str] = None) -> List[Block]:
    if not flow.is_open:
        return []
    locked = flow.locked_fields()
    required = set(flow.resource.required_fields)
    return [form(
        name,
        title,
        [
            form_field(
                key,
                flow.resource.label_for(key),
                field_type,
                value=flow.draft.get(key),
                required=key in required,
                options=options,
                disabled=flow.is_submitting or key in locked,
            )
            for key, field_type, options in fields
        ],
        submit_label=submit_label,
        can_submit=flow.can_submit,
        submitting=flow.is_submitting,
        error=flow.error,
        description=description,
    )]


def render_confirmation(name: str, flow: DeleteFlow, title: str, message: str) -> List[Block]:
    if not flow.is_open:
        return []
    return [confirmation(name, title, message, submitting=flow.is_submitting, error=flow.error)]


def render_notice(*flows: FormFlow) -> List[Block]:
    return [notice(f.notice) for f in flows if f.notice and not f.is_open]


def back_button(label: str = "Back to Dashboard") -> Block:
    return button(label, ui_action("back"), variant="ghost", icon="arrow-left")
