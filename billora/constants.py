from datetime import datetime
from zoneinfo import ZoneInfo

from billora.models.bill import BillType

DHAKA_TZ = ZoneInfo("Asia/Dhaka")

# Corporate package tiers and their default price per person.
PACKAGES = {
    "Economy": 150,
    "Standard": 250,
    "Premium": 450,
}

DEFAULT_PACKAGE = "Standard"

TYPE_LABELS = {BillType.CORPORATE: "Corporate", BillType.EVENT: "Event"}


def format_date(value: str) -> str:
    """Render an ISO date ('YYYY-MM-DD') as 'DD/MM/YYYY'."""
    if not value:
        return ""
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").strftime("%d/%m/%Y")
    except ValueError:
        return value
