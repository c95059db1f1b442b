from abc import ABC, abstractmethod

from billora.models.bill import Bill, BillType


class BillRepository(ABC):
    @abstractmethod
    def create(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def get_by_id(self, bill_id: str) -> Bill | None: ...

    @abstractmethod
    def list_all(self) -> list[Bill]: ...

    @abstractmethod
    def list_by_type(self, bill_type: BillType) -> list[Bill]: ...

    @abstractmethod
    def update(self, bill: Bill) -> Bill | None: ...

    @abstractmethod
    def delete(self, bill_id: str) -> None: ...
