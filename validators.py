"""
Input validators, used by the crud functions before touching the db.
Each parser returns the cleaned value or raises ValueError with the message
that ends up in the 400 response.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from models import NAME_MAX_LENGTH

CENTS = Decimal("0.01")
# largest value a NUMERIC(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")
# Integer columns are 32 bit signed
MAX_INTEGER = 2**31 - 1


def _to_decimal(value) -> Decimal:
    # bools are ints in python, but true/false is not a price or a quantity
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise InvalidOperation
    number = Decimal(str(value).strip())
    if not number.is_finite():
        raise InvalidOperation
    return number


def _to_integer(value) -> int:
    """ whole number within the Integer column range, checked before int() builds it """
    number = _to_decimal(value)
    # adjusted() is the exponent of the leading digit, cheap even for "1e3000000"
    if number and number.adjusted() >= 10:
        raise InvalidOperation
    if number != number.to_integral_value() or abs(number) > MAX_INTEGER:
        raise InvalidOperation
    return int(number)


def to_cents(amount) -> Decimal:
    """ rounds like a NUMERIC(10, 2) column does on write """
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def check_amount(amount: Decimal, message: str) -> Decimal:
    """ rejects amounts the NUMERIC(10, 2) columns cannot store """
    if amount > MAX_AMOUNT:
        raise ValueError(message)
    return amount


def parse_price(value) -> Decimal:
    """Price must be a number (or numeric string), not negative and fit NUMERIC(10, 2)."""
    try:
        price = _to_decimal(value)
        if 0 <= price <= MAX_AMOUNT:
            return to_cents(price)
    except InvalidOperation:
        pass
    raise ValueError("Price must be a positive number")


def parse_quantity(value) -> int:
    """Quantity must be a whole number >= 1; 3, "3" and 3.0 are all fine."""
    try:
        quantity = _to_integer(value)
    except InvalidOperation:
        raise ValueError("Quantity must be a positive integer")
    if quantity <= 0:
        raise ValueError("Quantity must be a positive integer")
    return quantity


def parse_id(value, field: str = "Product ID") -> int:
    try:
        return _to_integer(value)
    except InvalidOperation:
        raise ValueError(f"{field} must be an integer")


def parse_name(value) -> str:
    if not isinstance(value, str):
        raise ValueError("Name must be a string")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    return value


def is_missing(value) -> bool:
    """ absent, null and empty strings all count as not supplied """
    return value is None or (isinstance(value, str) and not value.strip())
