"""PDF export of shopping lists."""

import io
from dataclasses import dataclass

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from meal_planner.domain.meal_plans import ShoppingListCategory

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
LEFT_MARGIN = 50
ITEM_INDENT = 70
BOTTOM_MARGIN = 50


@dataclass(frozen=True)
class TextLine:
    """A positioned line of text on a PDF page."""

    text: str
    x: float
    y: float
    font: str
    size: int


def layout_shopping_list(
    shopping_list: list[ShoppingListCategory], page_height: float = A4[1]
) -> list[list[TextLine]]:
    """Place the title, categories and items on pages, top to bottom."""
    pages: list[list[TextLine]] = [
        [TextLine("Einkaufsliste", LEFT_MARGIN, page_height - 50, BOLD_FONT, 20)]
    ]
    y = page_height - 100
    for category in shopping_list:
        if y < BOTTOM_MARGIN:
            pages.append([])
            y = page_height - 50
        pages[-1].append(TextLine(category.category, LEFT_MARGIN, y, BOLD_FONT, 14))
        y -= 30
        for item in category.items:
            text = f"• {item.name}: {format_amount(item.amount)} {item.unit}".rstrip()
            pages[-1].append(TextLine(text, ITEM_INDENT, y, REGULAR_FONT, 12))
            y -= 20
            if y < BOTTOM_MARGIN:
                pages.append([])
                y = page_height - 50
        y -= 10
    return [page for page in pages if page]


def render_shopping_list_pdf(shopping_list: list[ShoppingListCategory]) -> bytes:
    """Render the shopping list as a paginated A4 PDF document."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle("Einkaufsliste")
    for page in layout_shopping_list(shopping_list, page_height=A4[1]):
        for line in page:
            pdf.setFont(line.font, line.size)
            pdf.drawString(line.x, line.y, line.text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def format_amount(amount: float) -> str:
    """Format an amount without trailing zeros."""
    formatted = f"{amount:.2f}".rstrip("0").rstrip(".")
    return formatted or "0"
