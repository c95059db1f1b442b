"""Root conftest: sample bills and an in-memory storage backend."""

from __future__ import annotations

from datetime import datetime

import pytest

from billora.constants import DHAKA_TZ
from billora.models.bill import Bill, BillType, LineItem
from billora.repositories.blob import BlobBillRepository
from billora.storage.memory import MemoryStorage

STORAGE_KEY = "billing_data"


def _sample_bill(bill_id: str = "bill-1", **overrides) -> Bill:
    defaults = dict(
        id=bill_id,
        type=BillType.CORPORATE,
        client_name="Acme Corp",
        contact_person="John Doe",
        contact_number="01700000000",
        date="2025-03-10",
        items=[
            LineItem(
                id=f"{bill_id}-item-1",
                description="Service on 2025-03-10",
                service_date="2025-03-10",
                package_type="Standard",
                quantity=2,
                unit_price=100,
                total=200,
            ),
            LineItem(
                id=f"{bill_id}-item-2",
                description="Service on 2025-03-11",
                service_date="2025-03-11",
                package_type="Economy",
                quantity=1,
                unit_price=50,
                total=50,
            ),
        ],
        grand_total=250,
        created_at=datetime(2025, 3, 10, 9, 30, tzinfo=DHAKA_TZ),
    )
    defaults.update(overrides)
    return Bill(**defaults)


def _sample_event_bill(bill_id: str = "event-1", **overrides) -> Bill:
    defaults = dict(
        id=bill_id,
        type=BillType.EVENT,
        client_name="Annual Dinner",
        contact_person="Jane Roe",
        contact_number="01800000000",
        date="2025-04-01",
        items=[
            LineItem(
                id=f"{bill_id}-item-1",
                description="Mixed Platter",
                package_name="Package-1",
                package_type="Standard",
                quantity=30,
                unit_price=200,
                total=6000,
            ),
        ],
        grand_total=6000,
        created_at=datetime(2025, 3, 20, 15, 0, tzinfo=DHAKA_TZ),
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def sample_bill():
    return _sample_bill


@pytest.fixture()
def sample_event_bill():
    return _sample_event_bill


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def bill_repo(memory_storage: MemoryStorage) -> BlobBillRepository:
    return BlobBillRepository(memory_storage, STORAGE_KEY)
