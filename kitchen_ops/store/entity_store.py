"""
Entity store interface - the keyed-record data store every service talks to
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

MENU_ITEM = "MenuItem"
INGREDIENT = "Ingredient"
CRITICAL_CONTROL_POINT = "CriticalControlPoint"
HAZARD = "Hazard"
ASSET = "Asset"
HACCP_PLAN = "HACCPPlan"
OPERATION_REPORT = "OperationReport"
SALE = "Sale"
CHECKLIST_MASTER = "ChecklistMaster"

NEWEST_FIRST = "-created_date"

Record = Dict[str, Any]


class EntityStoreError(Exception):
    """Base class for data store failures"""


class UnknownEntityError(EntityStoreError):
    def __init__(self, entity: str):
        super().__init__(f"Unknown entity: {entity}")
        self.entity = entity


class InvalidFieldError(EntityStoreError):
    def __init__(self, entity: str, fields):
        names = ", ".join(sorted(fields))
        super().__init__(f"Unknown field(s) for {entity}: {names}")
        self.entity = entity
        self.fields = set(fields)


class RecordNotFoundError(EntityStoreError):
    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


def parse_sort(sort: Optional[str]) -> Tuple[Optional[str], bool]:
    """Split a sort spec like "-created_date" into (field, descending)"""
    if not sort:
        return None, False
    if sort.startswith("-"):
        return sort[1:], True
    return sort, False


class EntityStore(ABC):
    """
    Async keyed-record store. Records go in and come out as plain dicts;
    each write is atomic for its single record only.
    """

    @abstractmethod
    async def list(
        self,
        entity: str,
        sort: Optional[str] = NEWEST_FIRST,
        limit: Optional[int] = None,
    ) -> List[Record]:
        pass

    @abstractmethod
    async def filter(
        self,
        entity: str,
        query: Dict[str, Any],
        sort: Optional[str] = NEWEST_FIRST,
        limit: Optional[int] = None,
    ) -> List[Record]:
        """Records whose fields equal every value in query"""
        pass

    @abstractmethod
    async def get(self, entity: str, record_id: str) -> Optional[Record]:
        pass

    @abstractmethod
    async def create(self, entity: str, fields: Dict[str, Any]) -> Record:
        pass

    @abstractmethod
    async def update(self, entity: str, record_id: str, fields: Dict[str, Any]) -> Record:
        pass
