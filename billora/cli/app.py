import questionary
from rich.console import Console

from billora.cli.bill_menu import create_bill_menu, list_bills_menu, show_dashboard
from billora.models.bill import BillType
from billora.repositories.factory import get_bill_repository
from billora.services.bill_service import BillService
from billora.storage.factory import get_storage

console = Console()


def _build_service() -> BillService:
    storage = get_storage()
    return BillService(get_bill_repository(storage), storage)


def main_menu() -> None:
    bill_service = _build_service()

    console.print()
    console.print("[bold]Catering Billing[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Dashboard",
                "Corporate Bills",
                "Event Bills",
                "New Corporate Bill",
                "New Event Bill",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Dashboard":
            show_dashboard(bill_service)
        elif choice == "Corporate Bills":
            list_bills_menu(BillType.CORPORATE, bill_service)
        elif choice == "Event Bills":
            list_bills_menu(BillType.EVENT, bill_service)
        elif choice == "New Corporate Bill":
            create_bill_menu(BillType.CORPORATE, bill_service)
        elif choice == "New Event Bill":
            create_bill_menu(BillType.EVENT, bill_service)
