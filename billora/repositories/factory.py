from billora.repositories.base import BillRepository
from billora.settings import settings
from billora.storage.base import StorageBackend


def get_bill_repository(storage: StorageBackend) -> BillRepository:
    from billora.repositories.blob import BlobBillRepository

    return BlobBillRepository(storage, settings.storage_key)
