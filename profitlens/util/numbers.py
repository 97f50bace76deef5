from decimal import Decimal, ROUND_HALF_UP


def money(x) -> float:
    return float(Decimal(x).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def qty(x) -> float:
    # stock and recipe quantities carry three places
    return float(Decimal(x).quantize(Decimal('0.001'), rounding=ROUND_HALF_UP))


def pct(x) -> float:
    return money(x)


def unit_price(x) -> float:
    # per-gram and per-ml prices run below a cent
    return float(Decimal(x).quantize(Decimal('0.000001'), rounding=ROUND_HALF_UP))
