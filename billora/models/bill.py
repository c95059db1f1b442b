from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BillType(str, Enum):
    CORPORATE = "Corporate"
    EVENT = "Event"


class LineItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    description: str = ""
    quantity: int = 1  # persons
    unit_price: int = 0
    total: int = 0
    service_date: str | None = None
    package_type: str | None = None
    package_name: str | None = None

    def with_total(self) -> LineItem:
        return self.model_copy(update={"total": self.quantity * self.unit_price})


class Bill(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    type: BillType
    client_name: str  # corporate name or event name
    contact_person: str = ""
    contact_number: str = ""
    date: str  # 'YYYY-MM-DD', billing date or event date
    items: list[LineItem] = []
    grand_total: int = 0
    created_at: datetime | None = None

    def with_totals(self) -> Bill:
        """Return a copy whose line totals and grand total are recomputed from the items."""
        items = [item.with_total() for item in self.items]
        return self.model_copy(update={"items": items, "grand_total": compute_grand_total(items)})


def compute_grand_total(items: list[LineItem]) -> int:
    return sum(item.quantity * item.unit_price for item in items)
