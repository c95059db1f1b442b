from __future__ import annotations

from pydantic import BaseModel

from billora.models.bill import Bill


class RevenueSummary(BaseModel):
    total_revenue: int = 0
    corporate_revenue: int = 0
    event_revenue: int = 0
    corporate_count: int = 0
    event_count: int = 0
    recent_bills: list[Bill] = []

    @property
    def bill_count(self) -> int:
        return self.corporate_count + self.event_count

    @property
    def average_bill(self) -> float:
        """Mean grand total per bill, 0 when there are no bills."""
        return self.total_revenue / self.bill_count if self.bill_count else 0
