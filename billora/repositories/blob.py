from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from billora.models.bill import Bill, BillType
from billora.repositories.base import BillRepository
from billora.storage.base import StorageBackend

logger = logging.getLogger(__name__)

_bills_adapter = TypeAdapter(list[Bill])


class BlobBillRepository(BillRepository):
    """Keeps every bill in memory and mirrors the whole list to one storage key.

    The blob is read once, on construction. Each mutation serializes the full
    list and writes it before the in-memory list is swapped, so a failed
    write leaves the collection untouched and the error reaches the caller.
    """

    def __init__(self, storage: StorageBackend, key: str) -> None:
        self.storage = storage
        self.key = key
        self._bills: list[Bill] = self._load()

    def _load(self) -> list[Bill]:
        if not self.storage.exists(self.key):
            logger.debug("No stored bills under %s", self.key)
            return []
        try:
            bills = _bills_adapter.validate_json(self.storage.get(self.key))
        except (ValidationError, ValueError):
            logger.warning("Stored bills under %s are unreadable, starting empty", self.key)
            return []
        logger.info("Loaded %d bills from %s", len(bills), self.key)
        return bills

    def _persist(self, bills: list[Bill]) -> None:
        data = _bills_adapter.dump_json(bills, by_alias=True, exclude_none=True)
        self.storage.save(self.key, data)
        self._bills = bills

    def create(self, bill: Bill) -> Bill:
        bill = bill.with_totals()
        if any(b.id == bill.id for b in self._bills):
            logger.warning("Bill id %s already stored, appending duplicate", bill.id)
        self._persist([*self._bills, bill])
        logger.debug("Bill %s stored (%d total)", bill.id, len(self._bills))
        return bill

    def get_by_id(self, bill_id: str) -> Bill | None:
        return next((b for b in self._bills if b.id == bill_id), None)

    def list_all(self) -> list[Bill]:
        return list(self._bills)

    def list_by_type(self, bill_type: BillType) -> list[Bill]:
        return [b for b in self._bills if b.type == bill_type]

    def update(self, bill: Bill) -> Bill | None:
        for index, existing in enumerate(self._bills):
            if existing.id == bill.id:
                break
        else:
            logger.debug("update: bill %s not found, nothing to do", bill.id)
            return None

        # type and created_at are fixed at creation
        bill = bill.with_totals().model_copy(update={"type": existing.type, "created_at": existing.created_at})
        bills = list(self._bills)
        bills[index] = bill
        self._persist(bills)
        return bill

    def delete(self, bill_id: str) -> None:
        remaining = [b for b in self._bills if b.id != bill_id]
        removed = len(self._bills) - len(remaining)
        if not removed:
            logger.debug("delete: bill %s not found, nothing to do", bill_id)
            return
        self._persist(remaining)
        logger.debug("delete: removed %d bill(s) with id %s", removed, bill_id)
