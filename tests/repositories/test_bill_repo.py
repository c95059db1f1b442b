import json
from unittest.mock import MagicMock

import pytest

from billora.models.bill import BillType, LineItem
from billora.repositories.blob import BlobBillRepository
from tests.conftest import STORAGE_KEY


def _stored_ids(storage) -> list[str]:
    return [b["id"] for b in json.loads(storage.get(STORAGE_KEY))]


class TestLoad:
    def test_empty_when_nothing_stored(self, memory_storage):
        repo = BlobBillRepository(memory_storage, STORAGE_KEY)
        assert repo.list_all() == []

    def test_corrupt_blob_is_empty(self, memory_storage):
        memory_storage.save(STORAGE_KEY, b"{not json")
        repo = BlobBillRepository(memory_storage, STORAGE_KEY)
        assert repo.list_all() == []

    def test_wrong_shape_is_empty(self, memory_storage):
        memory_storage.save(STORAGE_KEY, b'{"bills": []}')
        repo = BlobBillRepository(memory_storage, STORAGE_KEY)
        assert repo.list_all() == []

    def test_invalid_bytes_is_empty(self, memory_storage):
        memory_storage.save(STORAGE_KEY, b"\xff\xfe\x00")
        repo = BlobBillRepository(memory_storage, STORAGE_KEY)
        assert repo.list_all() == []

    def test_reads_once_at_construction(self):
        storage = MagicMock()
        storage.exists.return_value = True
        storage.get.return_value = b"[]"
        repo = BlobBillRepository(storage, STORAGE_KEY)
        repo.list_all()
        repo.get_by_id("x")
        storage.get.assert_called_once_with(STORAGE_KEY)

    def test_reload_yields_identical_sequence(self, bill_repo, memory_storage, sample_bill, sample_event_bill):
        bill_repo.create(sample_bill("a"))
        bill_repo.create(sample_event_bill("b"))
        bill_repo.create(sample_bill("c", client_name="Globex"))

        reloaded = BlobBillRepository(memory_storage, STORAGE_KEY)
        assert reloaded.list_all() == bill_repo.list_all()
        assert [b.id for b in reloaded.list_all()] == ["a", "b", "c"]


class TestCreate:
    def test_create_then_get_by_id(self, bill_repo, sample_bill):
        bill = sample_bill("new")
        bill_repo.create(bill)
        assert bill_repo.get_by_id("new") == bill

    def test_appends_in_insertion_order(self, bill_repo, sample_bill):
        for bill_id in ("z", "a", "m"):
            bill_repo.create(sample_bill(bill_id))
        assert [b.id for b in bill_repo.list_all()] == ["z", "a", "m"]

    def test_persists_every_call(self, bill_repo, memory_storage, sample_bill):
        bill_repo.create(sample_bill("a"))
        assert _stored_ids(memory_storage) == ["a"]
        bill_repo.create(sample_bill("b"))
        assert _stored_ids(memory_storage) == ["a", "b"]

    def test_persisted_blob_uses_camel_case(self, bill_repo, memory_storage, sample_bill):
        bill_repo.create(sample_bill("a"))
        stored = json.loads(memory_storage.get(STORAGE_KEY))[0]
        assert stored["clientName"] == "Acme Corp"
        assert stored["grandTotal"] == 250
        assert stored["items"][0]["unitPrice"] == 100

    def test_unset_optional_fields_are_not_written(self, bill_repo, memory_storage, sample_bill, sample_event_bill):
        bill_repo.create(sample_bill("a"))
        bill_repo.create(sample_event_bill("b"))
        corporate, event = json.loads(memory_storage.get(STORAGE_KEY))

        assert "packageName" not in corporate["items"][0]
        assert corporate["items"][0]["serviceDate"] == "2025-03-10"
        assert "serviceDate" not in event["items"][0]
        assert event["items"][0]["packageName"] == "Package-1"
        assert b"null" not in memory_storage.get(STORAGE_KEY)

    def test_bill_without_created_at_omits_it(self, bill_repo, memory_storage, sample_bill):
        bill_repo.create(sample_bill("a", created_at=None))
        stored = json.loads(memory_storage.get(STORAGE_KEY))[0]
        assert "createdAt" not in stored

        reloaded = BlobBillRepository(memory_storage, STORAGE_KEY)
        assert reloaded.get_by_id("a").created_at is None

    def test_recomputes_stale_totals(self, bill_repo, sample_bill):
        stale = sample_bill(
            "a",
            items=[
                LineItem(id="i1", quantity=2, unit_price=100, total=1),
                LineItem(id="i2", quantity=1, unit_price=50, total=0),
            ],
            grand_total=9999,
        )
        stored = bill_repo.create(stale)
        assert [i.total for i in stored.items] == [200, 50]
        assert stored.grand_total == 250
        assert bill_repo.get_by_id("a").grand_total == 250

    def test_duplicate_id_is_appended(self, bill_repo, sample_bill):
        bill_repo.create(sample_bill("dup"))
        bill_repo.create(sample_bill("dup", client_name="Second"))
        assert len(bill_repo.list_all()) == 2
        assert bill_repo.get_by_id("dup").client_name == "Acme Corp"

    def test_write_failure_propagates_and_keeps_collection(self, sample_bill):
        storage = MagicMock()
        storage.exists.return_value = False
        storage.save.side_effect = OSError("disk full")
        repo = BlobBillRepository(storage, STORAGE_KEY)

        with pytest.raises(OSError, match="disk full"):
            repo.create(sample_bill("a"))
        assert repo.list_all() == []


class TestUpdate:
    def test_replaces_only_matching_record(self, bill_repo, sample_bill):
        for bill_id in ("a", "b", "c"):
            bill_repo.create(sample_bill(bill_id))
        before = bill_repo.list_all()

        changed = sample_bill("b", client_name="Changed", items=[LineItem(id="x", quantity=3, unit_price=10)])
        result = bill_repo.update(changed)

        after = bill_repo.list_all()
        assert [b.id for b in after] == ["a", "b", "c"]
        assert after[0] == before[0]
        assert after[2] == before[2]
        assert after[1].client_name == "Changed"
        assert result.grand_total == 30

    def test_keeps_type_and_created_at(self, bill_repo, sample_bill):
        original = bill_repo.create(sample_bill("a"))
        bill_repo.update(sample_bill("a", type=BillType.EVENT, created_at=None))
        stored = bill_repo.get_by_id("a")
        assert stored.type == BillType.CORPORATE
        assert stored.created_at == original.created_at

    def test_persists(self, bill_repo, memory_storage, sample_bill):
        bill_repo.create(sample_bill("a"))
        bill_repo.update(sample_bill("a", client_name="Changed"))
        assert json.loads(memory_storage.get(STORAGE_KEY))[0]["clientName"] == "Changed"

    def test_missing_id_is_noop(self, bill_repo, memory_storage, sample_bill):
        bill_repo.create(sample_bill("a"))
        blob = memory_storage.get(STORAGE_KEY)

        assert bill_repo.update(sample_bill("missing")) is None
        assert [b.id for b in bill_repo.list_all()] == ["a"]
        assert memory_storage.get(STORAGE_KEY) == blob

    def test_replaces_first_of_duplicates(self, bill_repo, sample_bill):
        bill_repo.create(sample_bill("dup", client_name="First"))
        bill_repo.create(sample_bill("dup", client_name="Second"))
        bill_repo.update(sample_bill("dup", client_name="Changed"))
        assert [b.client_name for b in bill_repo.list_all()] == ["Changed", "Second"]


class TestDelete:
    def test_removes_and_keeps_order(self, bill_repo, memory_storage, sample_bill):
        for bill_id in ("a", "b", "c", "d"):
            bill_repo.create(sample_bill(bill_id))
        bill_repo.delete("b")
        assert [b.id for b in bill_repo.list_all()] == ["a", "c", "d"]
        assert _stored_ids(memory_storage) == ["a", "c", "d"]

    def test_removes_all_duplicates(self, bill_repo, sample_bill):
        bill_repo.create(sample_bill("dup"))
        bill_repo.create(sample_bill("keep"))
        bill_repo.create(sample_bill("dup"))
        bill_repo.delete("dup")
        assert [b.id for b in bill_repo.list_all()] == ["keep"]

    def test_missing_id_leaves_blob_unchanged(self, bill_repo, memory_storage, sample_bill, sample_event_bill):
        bill_repo.create(sample_bill("a"))
        bill_repo.create(sample_event_bill("b"))
        blob = memory_storage.get(STORAGE_KEY)

        bill_repo.delete("missing")

        assert memory_storage.get(STORAGE_KEY) == blob
        assert len(bill_repo.list_all()) == 2

    def test_missing_id_on_empty_store_writes_nothing(self, bill_repo, memory_storage):
        bill_repo.delete("missing")
        assert not memory_storage.exists(STORAGE_KEY)
        assert bill_repo.list_all() == []

    def test_missing_id_keeps_unreadable_blob(self, memory_storage):
        memory_storage.save(STORAGE_KEY, b"{partial")
        repo = BlobBillRepository(memory_storage, STORAGE_KEY)

        repo.delete("missing")

        assert memory_storage.get(STORAGE_KEY) == b"{partial"

    def test_missing_id_keeps_externally_written_blob(self, memory_storage):
        blob = (
            b'[{"id":"3f2a","type":"Event","clientName":"Gala","contactPerson":"Jane",'
            b'"contactNumber":"01800000000","date":"2025-03-10","items":[{"id":"i1",'
            b'"description":"Platter","quantity":2,"unitPrice":100,"total":200,'
            b'"packageType":"Standard"}],"grandTotal":200,"createdAt":"2025-03-10T03:30:00.000Z"}]'
        )
        memory_storage.save(STORAGE_KEY, blob)
        repo = BlobBillRepository(memory_storage, STORAGE_KEY)

        repo.delete("missing")

        assert memory_storage.get(STORAGE_KEY) == blob
        assert [b.id for b in repo.list_all()] == ["3f2a"]

    def test_missing_id_skips_storage_write(self, sample_bill):
        storage = MagicMock()
        storage.exists.return_value = False
        repo = BlobBillRepository(storage, STORAGE_KEY)
        repo.create(sample_bill("a"))
        storage.save.reset_mock()

        repo.delete("missing")

        storage.save.assert_not_called()


class TestQueries:
    def test_get_by_id_missing(self, bill_repo):
        assert bill_repo.get_by_id("nope") is None

    def test_list_by_type(self, bill_repo, sample_bill, sample_event_bill):
        bill_repo.create(sample_bill("c1"))
        bill_repo.create(sample_event_bill("e1"))
        bill_repo.create(sample_bill("c2"))

        events = bill_repo.list_by_type(BillType.EVENT)
        assert [b.id for b in events] == ["e1"]
        corporate = bill_repo.list_by_type(BillType.CORPORATE)
        assert [b.id for b in corporate] == ["c1", "c2"]

    def test_list_all_returns_copy(self, bill_repo, sample_bill):
        bill_repo.create(sample_bill("a"))
        bill_repo.list_all().clear()
        assert len(bill_repo.list_all()) == 1


class TestScenario:
    def test_corporate_bill_totals_and_formatting(self, bill_repo):
        from billora.models import amount_to_words, format_currency
        from billora.models.bill import Bill

        bill = bill_repo.create(
            Bill(
                id="A",
                type=BillType.CORPORATE,
                client_name="Acme",
                date="2025-03-10",
                items=[
                    LineItem(id="1", quantity=2, unit_price=100),
                    LineItem(id="2", quantity=1, unit_price=50),
                ],
            )
        )
        assert bill.grand_total == 250
        assert amount_to_words(bill.grand_total) == "Two hundred fifty Taka Only"
        assert format_currency(bill.grand_total) == "BDT\u00a0250"
