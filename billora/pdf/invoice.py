from __future__ import annotations

import logging

from fpdf import FPDF

from billora.constants import TYPE_LABELS, format_date
from billora.models import amount_to_words, format_currency
from billora.models.bill import Bill, BillType

logger = logging.getLogger(__name__)

FONT = "Helvetica"

COLORS: dict[str, tuple[int, int, int]] = {
    "primary": (31, 41, 55),
    "primary_light": (243, 244, 246),
    "secondary": (245, 158, 11),
    "secondary_dark": (180, 83, 9),
    "text_color": (17, 24, 39),
    "text_contrast": (255, 255, 255),
    "muted_text": (107, 114, 128),
    "row_alt": (249, 250, 251),
    "border_color": (209, 213, 219),
}


def _text(value: str) -> str:
    """Core PDF fonts only cover latin-1."""
    return value.encode("latin-1", errors="replace").decode("latin-1")


class InvoicePDF:
    def generate(self, bill: Bill) -> bytes:
        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=20)

        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, page_w, bill)
        self._draw_table(pdf, page_w, bill)
        self._draw_total(pdf, page_w, bill.grand_total)
        self._draw_amount_in_words(pdf, page_w, bill.grand_total)
        self._draw_footer(pdf, page_w)

        output = pdf.output()
        logger.debug(
            "PDF generated: bill=%s items=%d size=%d bytes",
            bill.id,
            len(bill.items),
            len(output),
        )
        return output

    def _draw_info_card(
        self,
        pdf: FPDF,
        x: float,
        y: float,
        w: float,
        h: float,
        label: str,
        value: str,
    ) -> None:
        """Draw a single info card with accent bar, label, and value."""
        c = COLORS
        pdf.set_fill_color(*c["primary_light"])
        pdf.rect(x, y, w, h, "F")
        pdf.set_fill_color(*c["secondary_dark"])
        pdf.rect(x, y, 3, h, "F")

        pdf.set_xy(x + 10, y + 3)
        pdf.set_font(FONT, "B", 7)
        pdf.set_text_color(*c["muted_text"])
        pdf.cell(w - 14, 5, label, new_x="LEFT", new_y="NEXT")
        pdf.set_x(x + 10)
        pdf.set_font(FONT, "B", 12)
        pdf.set_text_color(*c["text_color"])
        pdf.cell(w - 14, 9, _text(value or "-"))

    def _draw_header(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        c = COLORS
        x = pdf.l_margin
        y = pdf.get_y()

        # Header banner
        pdf.set_fill_color(*c["primary"])
        pdf.rect(x, y, page_w, 40, "F")

        pdf.set_y(y + 10)
        pdf.set_text_color(*c["text_contrast"])
        pdf.set_font(FONT, "B", 28)
        pdf.cell(0, 14, "INVOICE", align="C", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font(FONT, "", 9)
        pdf.set_text_color(*c["primary_light"])
        pdf.cell(
            0,
            8,
            _text(f"{TYPE_LABELS[bill.type]} Bill  #{bill.id}"),
            align="C",
            new_x="LMARGIN",
            new_y="NEXT",
        )

        pdf.ln(10)

        card_h = 24
        card_w = page_w / 2 - 3
        card_y = pdf.get_y()
        client_label = "EVENT" if bill.type == BillType.EVENT else "BILLED TO"
        date_label = "EVENT DATE" if bill.type == BillType.EVENT else "BILLING DATE"

        self._draw_info_card(pdf, x, card_y, card_w, card_h, client_label, bill.client_name)
        self._draw_info_card(pdf, x + card_w + 6, card_y, card_w, card_h, date_label, format_date(bill.date))

        row2_y = card_y + card_h + 6
        self._draw_info_card(pdf, x, row2_y, card_w, card_h, "CONTACT PERSON", bill.contact_person)
        self._draw_info_card(pdf, x + card_w + 6, row2_y, card_w, card_h, "CONTACT NUMBER", bill.contact_number)

        pdf.set_y(row2_y + card_h + 14)

    def _draw_table(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        c = COLORS
        col_desc = page_w * 0.34
        col_package = page_w * 0.18
        col_qty = page_w * 0.12
        col_price = page_w * 0.17
        col_total = page_w * 0.19
        line_h = 11

        pdf.set_font(FONT, "B", 11)
        pdf.set_text_color(*c["primary"])
        pdf.cell(0, 8, "ITEMS", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(2)

        # Accent underline
        pdf.set_draw_color(*c["secondary"])
        pdf.set_line_width(0.8)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + 30, y)
        pdf.ln(6)

        # Table header
        pdf.set_fill_color(*c["primary"])
        pdf.set_text_color(*c["text_contrast"])
        pdf.set_font(FONT, "B", 9)

        pdf.cell(col_desc, line_h, "  Description", border=0, fill=True)
        pdf.cell(col_package, line_h, "Package", border=0, fill=True, align="C")
        pdf.cell(col_qty, line_h, "Persons", border=0, fill=True, align="C")
        pdf.cell(col_price, line_h, "Unit Price", border=0, fill=True, align="R")
        pdf.cell(col_total, line_h, "Total  ", border=0, fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_text_color(*c["text_color"])
        pdf.set_font(FONT, "", 10)

        for i, item in enumerate(bill.items):
            if i % 2 == 0:
                pdf.set_fill_color(*c["row_alt"])
            else:
                pdf.set_fill_color(*c["text_contrast"])

            package = item.package_name or item.package_type or "-"
            pdf.cell(col_desc, line_h, _text(f"  {item.description}"), border=0, fill=True)
            pdf.set_font(FONT, "", 9)
            pdf.cell(col_package, line_h, _text(package), border=0, fill=True, align="C")
            pdf.cell(col_qty, line_h, str(item.quantity), border=0, fill=True, align="C")
            pdf.cell(col_price, line_h, format_currency(item.unit_price), border=0, fill=True, align="R")
            pdf.set_font(FONT, "B", 10)
            pdf.cell(
                col_total,
                line_h,
                f"{format_currency(item.quantity * item.unit_price)}  ",
                border=0,
                fill=True,
                align="R",
                new_x="LMARGIN",
                new_y="NEXT",
            )
            pdf.set_font(FONT, "", 10)

        # Bottom border
        pdf.set_draw_color(*c["border_color"])
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)

    def _draw_total(self, pdf: FPDF, page_w: float, grand_total: int) -> None:
        c = COLORS
        pdf.ln(4)

        col_label = page_w * 0.70
        col_amount = page_w * 0.30
        total_h = 14

        pdf.set_fill_color(*c["secondary_dark"])
        pdf.set_text_color(*c["text_contrast"])
        pdf.set_font(FONT, "B", 12)
        pdf.cell(col_label, total_h, "GRAND TOTAL  ", border=0, fill=True, align="R")
        pdf.set_font(FONT, "B", 14)
        pdf.cell(
            col_amount,
            total_h,
            f"{format_currency(grand_total)}  ",
            border=0,
            fill=True,
            align="R",
            new_x="LMARGIN",
            new_y="NEXT",
        )

    def _draw_amount_in_words(self, pdf: FPDF, page_w: float, grand_total: int) -> None:
        c = COLORS
        pdf.ln(10)

        pdf.set_font(FONT, "B", 8)
        pdf.set_text_color(*c["muted_text"])
        pdf.cell(0, 6, "AMOUNT IN WORDS", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(2)

        x = pdf.l_margin
        y = pdf.get_y()

        pdf.set_fill_color(*c["secondary"])
        pdf.rect(x, y, 3, 16, "F")
        pdf.set_fill_color(*c["primary_light"])
        pdf.rect(x + 3, y, page_w - 3, 16, "F")
        pdf.set_xy(x + 12, y + 5)
        pdf.set_text_color(*c["text_color"])
        pdf.set_font(FONT, "I", 10)
        pdf.multi_cell(page_w - 18, 6, amount_to_words(grand_total))

    def _draw_footer(self, pdf: FPDF, page_w: float) -> None:
        c = COLORS
        pdf.set_y(-30)
        pdf.set_draw_color(*c["border_color"])
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.ln(5)
        pdf.set_font(FONT, "", 7)
        pdf.set_text_color(*c["muted_text"])
        pdf.cell(0, 5, "Computer generated invoice, no signature required", align="C")
