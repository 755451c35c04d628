# edudesk/console/synchronizer.py
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from edudesk.core.errors import ConsoleError, ResponseFormatError, display_message
from edudesk.core.http import ApiClient
from edudesk.core.logging import log
from edudesk.console import stats
from edudesk.console.resources import ResourceConfig

T = TypeVar("T", bound=BaseModel)


class RemoteState:
    """Shared fetch lifecycle: loading flag, one error slot, mount tracking.

    Results that resolve after ``unmount()`` are dropped instead of being
    applied to state nobody displays anymore.
    """

    def __init__(self, http: ApiClient, error_message: str):
        self.http = http
        self.error_message = error_message
        self.loading = False
        self.error: Optional[str] = None
        self.loaded = False
        self.active = True

    async def mount(self) -> bool:
        self.active = True
        return await self.refresh()

    def unmount(self):
        self.active = False

    async def refresh(self) -> bool:
        raise NotImplementedError

    async def _run(self, fetch: Callable[[], Awaitable[Any]], apply: Callable[[Any], None], event: str) -> bool:
        self.loading = True
        try:
            result = await fetch()
        except ConsoleError as e:
            if not self.active:
                log.info(f"{event}_discarded", reason="unmounted")
                return False
            # Stale data stays in place, only the error slot changes
            self.error = display_message(e, self.error_message)
            log.warning(f"{event}_failed", error=self.error, error_type=type(e).__name__)
            return False
        finally:
            self.loading = False

        if not self.active:
            log.info(f"{event}_discarded", reason="unmounted")
            return False

        apply(result)
        self.error = None
        self.loaded = True
        return True


class CollectionSynchronizer(RemoteState, Generic[T]):
    """Owns the local copy of one backend collection."""

    def __init__(self, http: ApiClient, resource: ResourceConfig, error_message: Optional[str] = None):
        super().__init__(http, error_message or f"Failed to load {resource.label.lower()}s.")
        self.resource = resource
        self.items: List[T] = []
        self.envelope: Dict[str, Any] = {}

    async def refresh(self) -> bool:
        async def fetch():
            payload = await self.http.get(self.resource.list_path)
            return self.resource.parse_list(payload)

        def apply(result):
            # Wholesale replacement, never a merge
            self.items, self.envelope = result
            log.info("sync_refreshed", resource=self.resource.name, count=len(self.items))

        return await self._run(fetch, apply, "sync_refresh")

    def find(self, key_value: Any) -> Optional[T]:
        return next((item for item in self.items if str(self.resource.key_of(item)) == str(key_value)), None)

    def search(self, query: Optional[str]) -> List[T]:
        needle = (query or "").strip().lower()
        if not needle:
            return list(self.items)
        return [item for item in self.items if self._matches(item, needle)]

    def _matches(self, item: T, needle: str) -> bool:
        for field_name in self.resource.search_fields:
            value = getattr(item, field_name, None)
            if value is not None and needle in str(value).lower():
                return True
        return False

    # Derived aggregates, all safe on an empty collection

    def count(self) -> int:
        return len(self.items)

    def count_where(self, field_name: str, value: Any) -> int:
        return sum(1 for item in self.items if getattr(item, field_name, None) == value)

    def average(self, field_name: str) -> Optional[float]:
        return stats.average(getattr(item, field_name, None) for item in self.items)

    def total(self, field_name: str) -> float:
        numbers = (stats.to_number(getattr(item, field_name, None)) for item in self.items)
        return sum(n for n in numbers if n is not None)

    def unique_count(self, field_name: str) -> int:
        return stats.count_unique(getattr(item, field_name, None) for item in self.items)


class RecordLoader(RemoteState, Generic[T]):
    """Same lifecycle as a collection, for a single remote object."""

    def __init__(self, http: ApiClient, path: str, model: Type[T], error_message: str):
        super().__init__(http, error_message)
        self.path = path
        self.model = model
        self.data: Optional[T] = None

    async def refresh(self) -> bool:
        async def fetch():
            payload = await self.http.get(self.path)
            try:
                return self.model.model_validate(payload)
            except ValidationError as e:
                raise ResponseFormatError() from e

        def apply(result):
            self.data = result

        return await self._run(fetch, apply, "record_refresh")
