# edudesk/console/flows/delete.py
from typing import Any, Dict, Optional

from pydantic import BaseModel

from edudesk.console.flows.form import FormFlow


class DeleteFlow(FormFlow):
    """Confirmation dialog in front of a DELETE.

    The list is never touched here: the row disappears only when the owner's
    refresh brings back a list without it. A rejected delete (for example a
    student with enrollment records) keeps the dialog open with the server's
    message.
    """

    failure_message = "Failed to delete. Please try again."

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.target_label: Optional[str] = None

    def open_for(self, entity: BaseModel, label: Optional[str] = None):
        self.mode = "delete"
        self.editing_key = self.resource.key_of(entity)
        self.target_label = label or str(self.editing_key)
        self._open({self.resource.key: self.editing_key})

    def set_field(self, name: str, value: Any) -> bool:
        return False

    def missing_fields(self):
        return [] if self.editing_key is not None else [self.resource.key]

    def build_payload(self) -> Dict[str, Any]:
        return {}

    async def send(self, payload: Dict[str, Any]) -> Any:
        return await self.http.delete(self.resource.item_path(self.editing_key))
