import math
import re

# One amount: grouped thousands with an optional 1-2 digit decimal part, or a
# plain run of digits with an optional decimal part. Never glued to more digits.
_AMOUNT = r"\d{1,3}(?:[.,]\d{3})+(?:[.,]\d{1,2})?(?!\d)|\d+(?:[.,]\d{1,2})?(?!\d)"
_AMOUNT_RE = re.compile(_AMOUNT)
_CURRENCY_AMOUNT_RE = re.compile(r"(?:R\$|US\$|\$|€|£)\s*(" + _AMOUNT + ")")


def _first_amount(text: str) -> str | None:
    """Pick the first currency-tagged amount, else the first bare amount.

    Price containers often hold several numbers ("12x de R$ 16,66",
    "De R$ 199,90 por R$ 149,90"); only one token is ever parsed.
    """
    match = _CURRENCY_AMOUNT_RE.search(text)
    if match:
        return match.group(1)
    match = _AMOUNT_RE.search(text)
    return match.group(0) if match else None


def _to_decimal(token: str) -> str:
    if "," in token and "." in token:
        # Whichever separator comes last is the decimal one
        if token.rfind(",") > token.rfind("."):
            return token.replace(".", "").replace(",", ".")
        return token.replace(",", "")
    if "," in token:
        if token.count(",") > 1:
            return token.replace(",", "")
        return token.replace(",", ".")
    if token.count(".") > 1:
        return token.replace(".", "")
    return token


def parse_price(price_str: str | None) -> float | None:
    """Parse a price string like 'R$ 1.234,56' or '$1,234.56' into a float.

    Returns None when nothing numeric can be read.
    """
    if not price_str:
        return None
    token = _first_amount(price_str)
    if token is None:
        return None
    try:
        value = float(_to_decimal(token))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_positive_price(price_str: str | None) -> float | None:
    """Like parse_price, but only accepts values greater than zero."""
    value = parse_price(price_str)
    if value is None or value <= 0:
        return None
    return value
