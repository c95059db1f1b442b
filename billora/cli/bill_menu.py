from __future__ import annotations

from datetime import datetime

import questionary
from rich.console import Console
from rich.table import Table

from billora.constants import DEFAULT_PACKAGE, DHAKA_TZ, PACKAGES, TYPE_LABELS, format_date
from billora.models import amount_to_words, format_currency, parse_amount
from billora.models.bill import Bill, BillType, LineItem
from billora.services.bill_service import BillService

console = Console()


def _today() -> str:
    return datetime.now(DHAKA_TZ).date().isoformat()


def _is_iso_date(value: str) -> bool:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def _ask_text(label: str, default: str = "") -> str:
    """Ask until a non-empty answer is given."""
    while True:
        value = (questionary.text(label, default=default).ask() or "").strip()
        if value:
            return value
        console.print("[red]Required.[/red]")


def _ask_date(label: str, default: str = "") -> str:
    while True:
        value = (questionary.text(label, default=default).ask() or "").strip()
        if _is_iso_date(value):
            return value
        console.print("[red]Invalid date. Use YYYY-MM-DD (e.g. 2025-03-10).[/red]")


def _ask_number(label: str, default: int, minimum: int) -> int:
    while True:
        parsed = parse_amount(questionary.text(label, default=str(default)).ask() or "")
        if parsed is not None and parsed >= minimum:
            return parsed
        console.print(f"[red]Enter a whole number of at least {minimum}.[/red]")


def _ask_package(label: str, default: str | None) -> str:
    choices = list(PACKAGES)
    if default not in choices:
        default = DEFAULT_PACKAGE
    return questionary.select(label, choices=choices, default=default).ask() or default


def _prompt_item(bill_type: BillType, current: LineItem | None = None) -> LineItem:
    """Collect one row. Corporate rows are keyed by service date, event rows by package name."""
    if bill_type == BillType.CORPORATE:
        service_date = _ask_date("  Service date (YYYY-MM-DD):", (current.service_date or "") if current else "")
        package_type = _ask_package("  Package:", current.package_type if current else None)
        quantity = _ask_number("  Number of persons:", current.quantity if current else 1, 1)
        unit_price = _ask_number(
            "  Unit price:",
            current.unit_price if current else PACKAGES[package_type],
            0,
        )
        return LineItem(
            id=current.id if current else "",
            service_date=service_date,
            package_type=package_type,
            quantity=quantity,
            unit_price=unit_price,
        )

    package_name = _ask_text("  Package name:", (current.package_name or "") if current else "Package-1")
    package_type = _ask_package("  Package type:", current.package_type if current else None)
    description = _ask_text("  Description:", current.description if current else "")
    quantity = _ask_number("  Number of persons:", current.quantity if current else 1, 1)
    unit_price = _ask_number(
        "  Unit price:",
        current.unit_price if current else PACKAGES[package_type],
        0,
    )
    return LineItem(
        id=current.id if current else "",
        package_name=package_name,
        package_type=package_type,
        description=description,
        quantity=quantity,
        unit_price=unit_price,
    )


def _add_items(bill_type: BillType, items: list[LineItem]) -> list[LineItem]:
    """Append new rows until the user stops. An empty list always gets one row."""
    while True:
        if items and not questionary.confirm("Add another item?", default=False).ask():
            return items
        console.print()
        items.append(_prompt_item(bill_type))
        running = sum(i.quantity * i.unit_price for i in items)
        console.print(f"  [dim]Running total: {format_currency(running)}[/dim]")


def _prompt_header(bill_type: BillType, bill: Bill | None = None) -> tuple[str, str, str, str]:
    is_event = bill_type == BillType.EVENT
    name = _ask_text("Event name:" if is_event else "Corporate name:", bill.client_name if bill else "")
    date = _ask_date(
        "Event date (YYYY-MM-DD):" if is_event else "Billing date (YYYY-MM-DD):",
        bill.date if bill else _today(),
    )
    contact_person = _ask_text("Contact person:", bill.contact_person if bill else "")
    contact_number = _ask_text("Contact number:", bill.contact_number if bill else "")
    return name, date, contact_person, contact_number


def _print_totals(bill: Bill) -> None:
    console.print(f"  Total: [bold]{format_currency(bill.grand_total)}[/bold]")
    console.print(f"  [italic]{amount_to_words(bill.grand_total)}[/italic]")


def _show_bill_detail(bill: Bill) -> None:
    """Display a bill's header, line items and total."""
    console.print(f"  {'Event' if bill.type == BillType.EVENT else 'Client'}: {bill.client_name}")
    console.print(f"  Date: {format_date(bill.date)}")
    console.print(f"  Contact: {bill.contact_person} ({bill.contact_number})")

    detail_table = Table()
    detail_table.add_column("Description")
    detail_table.add_column("Package", justify="center")
    detail_table.add_column("Persons", justify="right")
    detail_table.add_column("Unit Price", justify="right")
    detail_table.add_column("Total", justify="right")

    for item in bill.items:
        detail_table.add_row(
            item.description,
            item.package_name or item.package_type or "-",
            str(item.quantity),
            format_currency(item.unit_price),
            format_currency(item.total),
        )

    console.print(detail_table)
    _print_totals(bill)


def create_bill_menu(bill_type: BillType, bill_service: BillService) -> Bill:
    console.print()
    console.print(f"[bold]New {TYPE_LABELS[bill_type]} Bill[/bold]", style="cyan")

    name, date, contact_person, contact_number = _prompt_header(bill_type)
    items = _add_items(bill_type, [])

    bill = bill_service.create_bill(
        bill_type=bill_type,
        client_name=name,
        contact_person=contact_person,
        contact_number=contact_number,
        date=date,
        items=items,
    )

    console.print()
    console.print("[green bold]Bill created![/green bold]")
    _print_totals(bill)
    return bill


def edit_bill_menu(bill: Bill, bill_service: BillService) -> Bill:
    console.print()
    console.print(f"[bold]Edit {TYPE_LABELS[bill.type]} Bill[/bold]", style="cyan")

    name, date, contact_person, contact_number = _prompt_header(bill.type, bill)

    items: list[LineItem] = []
    for item in bill.items:
        action = questionary.select(
            f"  '{item.description}' ({item.quantity} x {format_currency(item.unit_price)}):",
            choices=["Keep", "Edit", "Remove"],
        ).ask()

        if action == "Keep":
            items.append(item)
        elif action == "Edit":
            items.append(_prompt_item(bill.type, item))
        # "Remove" (or cancel) drops the row

    if not items:
        console.print("[yellow]A bill needs at least one item.[/yellow]")
    items = _add_items(bill.type, items)

    updated = bill_service.update_bill(
        bill=bill,
        client_name=name,
        contact_person=contact_person,
        contact_number=contact_number,
        date=date,
        items=items,
    )
    if updated is None:
        console.print("[red]Bill not found.[/red]")
        return bill

    console.print()
    console.print("[green bold]Bill updated![/green bold]")
    _print_totals(updated)
    return updated


def list_bills_menu(bill_type: BillType, bill_service: BillService) -> None:
    bills = bill_service.list_bills(bill_type)
    label = TYPE_LABELS[bill_type]

    if not bills:
        console.print(f"[yellow]No {label.lower()} bills yet.[/yellow]")
        return

    is_event = bill_type == BillType.EVENT
    table = Table(title=f"{label} Bills")
    table.add_column("#", style="dim")
    table.add_column("Event Name" if is_event else "Corporate Name")
    table.add_column("Event Date" if is_event else "Billing Date")
    table.add_column("Contact")
    table.add_column("Total", justify="right")

    for n, b in enumerate(bills, start=1):
        table.add_row(
            str(n),
            b.client_name,
            format_date(b.date),
            f"{b.contact_person} {b.contact_number}".strip(),
            format_currency(b.grand_total),
        )

    console.print()
    console.print(table)

    bill_choices = {f"{n} - {b.client_name} ({format_date(b.date)})": b for n, b in enumerate(bills, start=1)}
    choices = list(bill_choices.keys()) + ["Back"]
    choice = questionary.select("Select a bill:", choices=choices).ask()

    if choice is None or choice == "Back":
        return

    selected = bill_choices[choice]
    bill = bill_service.get_bill(selected.id)
    if not bill:
        console.print("[red]Bill not found.[/red]")
        return

    _bill_detail_menu(bill, bill_service)


def _bill_detail_menu(bill: Bill, bill_service: BillService) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]{TYPE_LABELS[bill.type]} Bill - {bill.client_name}[/bold cyan]")
        _show_bill_detail(bill)
        console.print()

        action = questionary.select(
            "Actions:",
            choices=[
                "Edit Bill",
                "Export Invoice PDF",
                "Delete Bill",
                "Back",
            ],
        ).ask()

        if action is None or action == "Back":
            break
        elif action == "Edit Bill":
            bill = edit_bill_menu(bill, bill_service)
        elif action == "Export Invoice PDF":
            path = bill_service.export_invoice(bill)
            console.print("[green]Invoice exported![/green]")
            console.print(f"  Path: {path}")
        elif action == "Delete Bill":
            confirm = questionary.confirm("Are you sure you want to delete this bill?", default=False).ask()
            if confirm:
                bill_service.delete_bill(bill.id)
                console.print("[green]Bill deleted.[/green]")
                break


def show_dashboard(bill_service: BillService) -> None:
    summary = bill_service.revenue_summary()

    console.print()
    stats = Table(title="Dashboard")
    stats.add_column("Metric")
    stats.add_column("Value", justify="right")
    stats.add_row("Total Revenue", format_currency(summary.total_revenue))
    stats.add_row(f"Corporate ({summary.corporate_count})", format_currency(summary.corporate_revenue))
    stats.add_row(f"Events ({summary.event_count})", format_currency(summary.event_revenue))
    stats.add_row("Bills", str(summary.bill_count))
    stats.add_row("Average Bill", format_currency(summary.average_bill))
    console.print(stats)

    if not summary.recent_bills:
        console.print("[yellow]No bills yet.[/yellow]")
        return

    recent = Table(title="Recent Bills")
    recent.add_column("Client")
    recent.add_column("Type", justify="center")
    recent.add_column("Date")
    recent.add_column("Total", justify="right")
    for b in summary.recent_bills:
        recent.add_row(b.client_name, TYPE_LABELS[b.type], format_date(b.date), format_currency(b.grand_total))
    console.print(recent)
