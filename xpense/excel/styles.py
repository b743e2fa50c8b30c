"""
Workbook look for ledger exports: palette, fonts, fills, borders.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
INK = "1F2937"
ACCENT = "0EA5E9"
INCOME_GREEN = "047857"
EXPENSE_RED = "B91C1C"
GRID = "D1D5DB"
STRIPE = "F3F4F6"
TOTAL_BG = "E0F2FE"

AMOUNT_FORMAT = '"$"#,##0.00'


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side,
                  top=Side(style=top, color=color), bottom=Side(style=bottom, color=color))


# ---------------------------------------------------------------------------
# Header / body / total
# ---------------------------------------------------------------------------
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
HEADER_FILL = _solid(INK)
HEADER_BORDER = Border(bottom=Side(style="medium", color=ACCENT))

BODY_FONT = Font(name="Calibri", size=10, color=INK)
BODY_BORDER = _box(GRID)
STRIPE_FILL = _solid(STRIPE)

TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=INK)
TOTAL_FILL = _solid(TOTAL_BG)
TOTAL_BORDER = _box("9CA3AF", top="medium", bottom="double")

# Rows of a given transaction type are tinted by their font colour
TYPE_FONTS = {
    "income": Font(name="Calibri", size=10, color=INCOME_GREEN),
    "expense": Font(name="Calibri", size=10, color=EXPENSE_RED),
}

HEADER_ALIGN = Alignment(horizontal="center", vertical="center")
TEXT_ALIGN = Alignment(horizontal="left", vertical="center")
AMOUNT_ALIGN = Alignment(horizontal="right", vertical="center")
