import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from kitchen.domain.ShoppingList import ShoppingList

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 11),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
]


def _document(buf):
    return SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)


def generate_pdf_for_shopping_list(shopping_list, title: str = "Shopping List"):
    """Printable shopping list: one table per category with a checkbox column."""
    if isinstance(shopping_list, dict):
        shopping_list = ShoppingList.from_dict(shopping_list)

    buf = io.BytesIO()
    doc = _document(buf)
    styles = getSampleStyleSheet()
    summary = shopping_list.summary
    elements = [
        Paragraph(escape(title), styles["Title"]),
        Paragraph(f"Generated {shopping_list.generated_at:%Y-%m-%d %H:%M} - {summary.get('totalItems', 0)} items, "
                  f"{summary.get('needToBuy', 0)} to buy", styles["Normal"]),
        Spacer(1, 12),
    ]

    for category, items in shopping_list.items.items():
        if not items:
            continue
        elements.append(Paragraph(escape(category), styles["Heading2"]))
        data = [["", "Item", "Amount", "Recipes"]]
        for item in items:
            mark = "[x]" if item.purchased else "[ ]"
            name = f"{item.ingredient} (have)" if item.in_inventory else item.ingredient
            if item.optional:
                name += " (optional)"
            data.append([mark, name, item.amount or "-", ", ".join(item.recipes)])
        table = Table(data, colWidths=[30, 180, 90, 250], repeatRows=1)
        table.setStyle(TableStyle(_HEADER_STYLE))
        elements.append(table)
        elements.append(Spacer(1, 10))

    if not shopping_list.all_items():
        elements.append(Paragraph("Nothing to buy.", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()


def generate_pdf_for_prep_schedule(suggestion):
    """Printable prep schedule: a task table per prep day followed by the metrics."""
    buf = io.BytesIO()
    doc = _document(buf)
    styles = getSampleStyleSheet()
    metrics = suggestion.metrics
    elements = [
        Paragraph("Meal Prep Schedule", styles["Title"]),
        Paragraph(f"Week of {suggestion.week_start_date or '-'}", styles["Normal"]),
        Spacer(1, 12),
    ]

    for day in suggestion.prep_schedule:
        elements.append(Paragraph(f"{day.day.capitalize()} - {day.total_time} min", styles["Heading2"]))
        data = [["Task", "Time", "Priority", "Equipment"]]
        for task in day.tasks:
            data.append([task.description, f"{task.estimated_time} min", task.priority, ", ".join(task.equipment)])
        table = Table(data, colWidths=[250, 60, 60, 180], repeatRows=1)
        table.setStyle(TableStyle(_HEADER_STYLE))
        elements.append(table)
        elements.append(Spacer(1, 10))

    if not suggestion.prep_schedule:
        elements.append(Paragraph("No prep tasks this week.", styles["Normal"]))

    elements.append(Paragraph(
        f"Total prep {metrics.total_prep_time} min, about {metrics.time_saved} min saved during the week "
        f"({metrics.efficiency}%). {metrics.recipes_affected} recipes affected, "
        f"{metrics.ingredients_consolidated} ingredients consolidated.", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
