from __future__ import annotations


def _exponential(num: float, digits: int = 2) -> str:
    # "5.00e-3" rather than Python's "5.00e-03"
    mantissa, exp = f"{num:.{digits}e}".split("e")
    return f"{mantissa}e{int(exp):+d}"


def format_number(num: float) -> str:
    """Render a user's guess: 5,000,000 / 3.14 / 5.00e-3."""
    if num >= 1e3:
        return f"{num:,.0f}"
    if num >= 1:
        s = f"{num:,.2f}"
        return s.rstrip("0").rstrip(".")
    return _exponential(num)


def describe_power_of_ten(power: int) -> str:
    if power >= 12:
        return "(that's about 1 trillion)"
    if power >= 9:
        return "(that's about 1 billion)"
    if power >= 6:
        return "(that's about 1 million)"
    if power >= 3:
        return "(that's about 1,000)"
    if power >= 0:
        return f"(that's about {10 ** power:,})"
    if power == -3:
        return "(that's about 0.001)"
    if power < -3:
        return f"(that's about {_exponential(10.0 ** power)})"
    # -1, -2
    return f"(that's about {10.0 ** power:g})"


def orders_off_line(error: int) -> str:
    return f"You were {error} order{'' if error == 1 else 's'} of magnitude off"


def power_of_ten(order: int) -> str:
    return f"10^{order}"
