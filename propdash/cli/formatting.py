"""Value formatting shared by the CLI commands."""

__all__ = ["format_currency", "format_date_dmy", "format_r", "format_value", "signed_color"]


def format_currency(value: float) -> str:
    """1234.5 -> '$1,234.50'; negatives as '-$40.00'."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_value(value: float, fmt: str) -> str:
    """Format a KPI value as 'currency', 'int' or 'percent'."""
    if fmt == "int":
        return str(int(value))
    if fmt == "percent":
        return f"{value:.1f}%"
    return format_currency(value)


def format_date_dmy(date_str: str) -> str:
    """'2025-03-10' -> '10/03/2025'. Other text is returned unchanged."""
    parts = date_str.split("-")
    if len(parts) != 3:
        return date_str
    year, month, day = parts
    return f"{day}/{month}/{year}"


def format_r(value: float) -> str:
    """Signed R-multiple, e.g. '+2.00R'."""
    return f"{value:+.2f}R"


def signed_color(value: float) -> str:
    return "green" if value >= 0 else "red"
