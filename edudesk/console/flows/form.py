# edudesk/console/flows/form.py
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from edudesk.core.errors import ConsoleError, FormValidationError, display_message
from edudesk.core.http import ApiClient
from edudesk.core.logging import log
from edudesk.console.resources import ResourceConfig

SuccessHook = Callable[[], Awaitable[Any]]


class FormState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class FormFlow:
    """Dialog lifecycle for creating or editing one entity.

    CLOSED -> OPEN(draft) -> SUBMITTING -> CLOSED on success, or back to OPEN
    with ``error`` set and the draft untouched on failure. Nothing reaches the
    network before ``submit()``.
    """

    failure_message = "Failed to save. Please try again."

    def __init__(self, http: ApiClient, resource: ResourceConfig, on_success: Optional[SuccessHook] = None):
        self.http = http
        self.resource = resource
        self.on_success = on_success
        self.state = FormState.CLOSED
        self.mode = "create"
        self.draft: Dict[str, Any] = {}
        self.editing_key: Any = None
        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        self.active = True

    @property
    def is_open(self) -> bool:
        return self.state is not FormState.CLOSED

    @property
    def is_submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return self.state is FormState.OPEN and not self.missing_fields()

    def open_create(self, initial: Optional[Dict[str, Any]] = None):
        self.mode = "create"
        self.editing_key = None
        self._open(dict(initial or {}))

    def open_edit(self, entity: BaseModel):
        self.mode = "edit"
        self.editing_key = self.resource.key_of(entity)
        self._open(entity.model_dump(mode="json"))

    def _open(self, draft: Dict[str, Any]):
        self.state = FormState.OPEN
        self.draft = draft
        self.error = None
        self.notice = None
        self.active = True
        log.info("form_opened", resource=self.resource.name, mode=self.mode, key=self.editing_key)

    def locked_fields(self) -> tuple:
        return self.resource.immutable_fields if self.mode == "edit" else ()

    def set_field(self, name: str, value: Any) -> bool:
        if self.state is not FormState.OPEN:
            log.info("form_field_ignored", resource=self.resource.name, field=name, state=self.state.value)
            return False
        if name in self.locked_fields():
            return False
        self.draft[name] = value
        return True

    def missing_fields(self) -> List[str]:
        return [name for name in self.resource.required_fields if _blank(self.draft.get(name))]

    def payload_model(self) -> Optional[type]:
        if self.mode == "edit":
            return self.resource.update_model
        return self.resource.create_model

    def build_payload(self) -> Dict[str, Any]:
        """Coerce the draft through the payload model; blank values are dropped."""
        locked = self.locked_fields()
        cleaned = {}
        for name, value in self.draft.items():
            if name in locked:
                continue
            if isinstance(value, str):
                value = value.strip()
            if _blank(value):
                continue
            cleaned[name] = value

        model = self.payload_model()
        if model is None:
            return cleaned
        try:
            payload = model.model_validate(cleaned)
        except ValidationError as e:
            first = e.errors()[0]
            field_name = str(first["loc"][0]) if first.get("loc") else ""
            raise FormValidationError(f"{self.resource.label_for(field_name)}: {first['msg']}") from e
        return payload.model_dump(mode="json", exclude_none=True)

    async def send(self, payload: Dict[str, Any]) -> Any:
        if self.mode == "edit":
            return await self.http.put(self.resource.item_path(self.editing_key), payload)
        return await self.http.post(self.resource.endpoint, payload)

    async def submit(self) -> bool:
        if self.state is not FormState.OPEN:
            # Second click while a request is in flight, or nothing open
            log.info("form_submit_ignored", resource=self.resource.name, state=self.state.value)
            return False

        missing = self.missing_fields()
        if missing:
            labels = ", ".join(self.resource.label_for(name) for name in missing)
            self.error = f"Please fill in the required fields: {labels}."
            return False

        try:
            payload = self.build_payload()
        except FormValidationError as e:
            self.error = e.message
            return False

        self.state = FormState.SUBMITTING
        self.error = None
        try:
            result = await self.send(payload)
            await self.after_success(result, payload)
        except ConsoleError as e:
            self._reopen(display_message(e, self.failure_message))
            log.warning("form_submit_failed", resource=self.resource.name, mode=self.mode, error=self.error)
            return False
        except Exception as e:
            self._reopen(self.failure_message)
            log.error("form_submit_error", resource=self.resource.name, mode=self.mode,
                      error=str(e), error_type=type(e).__name__, exc_info=True)
            return False

        if not self.active:
            log.info("form_submit_discarded", resource=self.resource.name, reason="unmounted")
            return True

        log.info("form_submitted", resource=self.resource.name, mode=self.mode, key=self.editing_key)
        self.state = FormState.CLOSED
        self.draft = {}
        self.editing_key = None
        self.notice = result.get("message") if isinstance(result, dict) else None
        if self.on_success:
            await self.on_success()
        return True

    def _reopen(self, error: str):
        # SUBMITTING always ends; the draft stays as it was
        self.state = FormState.OPEN
        if self.active:
            self.error = error

    async def after_success(self, result: Any, payload: Dict[str, Any]):
        """Runs before the dialog closes; raising a ConsoleError fails the submit."""

    def cancel(self) -> bool:
        if self.state is FormState.SUBMITTING:
            return False
        self.state = FormState.CLOSED
        self.draft = {}
        self.editing_key = None
        self.error = None
        return True

    def detach(self):
        self.active = False


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
