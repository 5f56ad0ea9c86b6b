from decimal import Decimal, ROUND_HALF_UP


MONEY_QUANT = Decimal("0.01")
UNIT_QUANT = Decimal("1")


def quantize(value: float | int | str, quant: Decimal) -> float:
    return float(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP))


def money(value: float | int | str) -> float:
    return quantize(value, MONEY_QUANT)


def whole(value: float | int | str) -> float:
    return quantize(value, UNIT_QUANT)
