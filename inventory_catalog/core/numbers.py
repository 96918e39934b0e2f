from decimal import Decimal, InvalidOperation

_ONE_PLACE = Decimal("0.1")
_HUNDRED = Decimal(100)


def _to_decimal(value):
    return Decimal(repr(float(value)))


def _render(amount):
    # One decimal place unless the value carries more precision than that.
    try:
        rounded = amount.quantize(_ONE_PLACE)
    except InvalidOperation:
        return f"{amount.normalize():f}"
    if rounded == amount:
        return f"{rounded:f}"
    return f"{amount.normalize():f}"


def format_amount(value) -> str:
    return _render(_to_decimal(value))


def format_percent(fraction) -> str:
    return _render(_to_decimal(fraction) * _HUNDRED) + "%"


def parse_fraction(text) -> float:
    """Read a discount written as ``10.0%`` or as a bare fraction ``0.1``."""
    value = str(text).strip()
    try:
        if value.endswith("%"):
            return float(Decimal(value[:-1].strip()) / _HUNDRED)
        return float(Decimal(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid discount value: {value!r}") from exc
