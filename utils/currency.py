from decimal import Decimal, InvalidOperation


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount as currency string, e.g. '$1,234.56' or '-$5.00'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_signed(amount: Decimal, symbol: str = "$") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percent(share: float) -> str:
    """Whole-number percentage, e.g. 0.355 -> '36%'."""
    return f"{share * 100:.0f}%"


def parse_amount(text: str) -> Decimal:
    """Parse user-entered amount text into a Decimal.

    Accepts an optional leading sign, thousands separators and a currency
    symbol. Raises ValueError when the text is not a finite number.
    """
    cleaned = (text or "").strip().replace(",", "").replace("$", "")
    if not cleaned:
        raise ValueError("Amount is required.")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {text!r}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {text!r}")
    return value
