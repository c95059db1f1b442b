from __future__ import annotations

import logging
from datetime import datetime

from ulid import ULID

from billora.constants import DHAKA_TZ
from billora.models.bill import Bill, BillType, LineItem
from billora.models.summary import RevenueSummary
from billora.pdf.invoice import InvoicePDF
from billora.repositories.base import BillRepository
from billora.settings import settings
from billora.storage.base import StorageBackend

logger = logging.getLogger(__name__)

RECENT_BILLS_LIMIT = 5


def _storage_key(bill_id: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{bill_id}.pdf"
    return f"{bill_id}.pdf"


def _build_line_items(bill_type: BillType, items: list[LineItem]) -> list[LineItem]:
    """Give new rows an id, corporate rows their derived description, and every row its total."""
    if not items:
        raise ValueError("A bill needs at least one line item")

    line_items: list[LineItem] = []
    for item in items:
        update: dict[str, object] = {"id": item.id or str(ULID())}
        if bill_type == BillType.CORPORATE:
            update["description"] = f"Service on {item.service_date or ''}".strip()
        line_items.append(item.model_copy(update=update).with_total())
    return line_items


class BillService:
    def __init__(self, bill_repo: BillRepository, storage: StorageBackend) -> None:
        self.bill_repo = bill_repo
        self.storage = storage
        self.pdf_generator = InvoicePDF()

    def create_bill(
        self,
        bill_type: BillType,
        client_name: str,
        contact_person: str,
        contact_number: str,
        date: str,
        items: list[LineItem],
    ) -> Bill:
        bill = Bill(
            id=str(ULID()),
            type=bill_type,
            client_name=client_name,
            contact_person=contact_person,
            contact_number=contact_number,
            date=date,
            items=_build_line_items(bill_type, items),
            created_at=datetime.now(DHAKA_TZ),
        )
        bill = self.bill_repo.create(bill)
        logger.info(
            "Bill created: id=%s, type=%s, client=%s, total=%d",
            bill.id,
            bill.type.value,
            client_name,
            bill.grand_total,
        )
        return bill

    def update_bill(
        self,
        bill: Bill,
        client_name: str,
        contact_person: str,
        contact_number: str,
        date: str,
        items: list[LineItem],
    ) -> Bill | None:
        """Replace every editable field of bill. id, type and created_at are kept."""
        replacement = Bill(
            id=bill.id,
            type=bill.type,
            client_name=client_name,
            contact_person=contact_person,
            contact_number=contact_number,
            date=date,
            items=_build_line_items(bill.type, items),
            created_at=bill.created_at,
        )
        updated = self.bill_repo.update(replacement)
        if updated is None:
            logger.warning("Bill %s not found, update skipped", bill.id)
            return None
        logger.info("Bill updated: id=%s, total=%d", updated.id, updated.grand_total)
        return updated

    def get_bill(self, bill_id: str) -> Bill | None:
        result = self.bill_repo.get_by_id(bill_id)
        logger.debug("get_bill id=%s found=%s", bill_id, result is not None)
        return result

    def list_bills(self, bill_type: BillType | None = None) -> list[Bill]:
        if bill_type is None:
            result = self.bill_repo.list_all()
        else:
            result = self.bill_repo.list_by_type(bill_type)
        logger.debug("Listed %d bills (type=%s)", len(result), bill_type.value if bill_type else "all")
        return result

    def delete_bill(self, bill_id: str) -> None:
        self.bill_repo.delete(bill_id)
        logger.info("Bill %s deleted", bill_id)

    def revenue_summary(self) -> RevenueSummary:
        bills = self.bill_repo.list_all()
        corporate = [b for b in bills if b.type == BillType.CORPORATE]
        event = [b for b in bills if b.type == BillType.EVENT]
        # Stable sort keeps insertion order among bills sharing a date.
        recent = sorted(bills, key=lambda b: b.date, reverse=True)[:RECENT_BILLS_LIMIT]
        return RevenueSummary(
            total_revenue=sum(b.grand_total for b in bills),
            corporate_revenue=sum(b.grand_total for b in corporate),
            event_revenue=sum(b.grand_total for b in event),
            corporate_count=len(corporate),
            event_count=len(event),
            recent_bills=recent,
        )

    def render_invoice(self, bill: Bill) -> bytes:
        return bytes(self.pdf_generator.generate(bill))

    def export_invoice(self, bill: Bill) -> str:
        """Render the invoice PDF, save it to storage and return the storage path."""
        key = _storage_key(bill.id)
        path = self.storage.save(key, self.render_invoice(bill), content_type="application/pdf")
        logger.info("Invoice stored at %s for bill %s", key, bill.id)
        return path
