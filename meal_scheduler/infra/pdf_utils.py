import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from meal_scheduler.domain.Schedule import Schedule
from meal_scheduler.utilities.constants import DAYS, MEAL_CATEGORIES
from meal_scheduler.utilities.errors import ScheduleNotFoundError

HEADER_COLOR = colors.HexColor("#2E7D32")
PREMIUM_COLOR = colors.HexColor("#FFF3C4")
STRIPE_COLOR = colors.HexColor("#F4F8F4")


def _cell(meal):
    if meal is None:
        return "-"
    return f"{meal.name} *" if meal.is_five_star() else meal.name


def generate_pdf_for_week(schedule: Schedule, week_number: int):
    """Delivery sheet for one week: one row per day, one column per meal category.

    Absent slots print "-"; five-star meals are starred and shaded.
    """
    week = schedule.get_week(week_number)
    if week is None:
        raise ScheduleNotFoundError(f"Week {week_number} not found in schedule for user {schedule.user_id}")

    rows = [["Day"] + [c.capitalize() for c in MEAL_CATEGORIES]]
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (0, -1), "Helvetica-Bold"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ALIGN", (1, 1), (-1, -1), "LEFT"),
        ("GRID", (0, 0), (-1, -1), 0.4, colors.grey),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]
    for row_index, day in enumerate(DAYS, start=1):
        slots = week.days.get(day, {})
        rows.append([day.capitalize()] + [_cell(slots.get(c)) for c in MEAL_CATEGORIES])
        if row_index % 2 == 0:
            style.append(("BACKGROUND", (0, row_index), (-1, row_index), STRIPE_COLOR))
        for col_index, category in enumerate(MEAL_CATEGORIES, start=1):
            meal = slots.get(category)
            if meal is not None and meal.is_five_star():
                style.append(("BACKGROUND", (col_index, row_index), (col_index, row_index), PREMIUM_COLOR))

    page_width, _ = landscape(A4)
    day_col = 90
    meal_col = (page_width - 2 * 28 - day_col) / len(MEAL_CATEGORIES)
    table = Table(rows, colWidths=[day_col] + [meal_col] * len(MEAL_CATEGORIES), repeatRows=1)
    table.setStyle(TableStyle(style))

    styles = getSampleStyleSheet()
    plan = schedule.plan_name or schedule.subscription_tier
    elements = [
        Paragraph(f"{plan}: week {week_number}", styles["Title"]),
        Paragraph(f"User {schedule.user_id}. {week.total_meals} meals, "
                  f"{week.five_star_meals} five-star.", styles["Normal"]),
        Spacer(1, 12),
        table,
        Spacer(1, 8),
        Paragraph("* five-star meal", styles["Italic"]),
    ]

    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(A4), title=f"Meal schedule week {week_number}",
                            leftMargin=28, rightMargin=28, topMargin=24, bottomMargin=24)
    doc.build(elements)
    return buf.getvalue()
