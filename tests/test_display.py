from display import describe_power_of_ten, format_number, orders_off_line


def test_format_number():
    assert format_number(5_000_000) == "5,000,000"
    assert format_number(1234) == "1,234"
    assert format_number(3.14159) == "3.14"
    assert format_number(3) == "3"
    assert format_number(0.005) == "5.00e-3"


def test_describe_power_of_ten():
    assert describe_power_of_ten(15) == "(that's about 1 trillion)"
    assert describe_power_of_ten(9) == "(that's about 1 billion)"
    assert describe_power_of_ten(7) == "(that's about 1 million)"
    assert describe_power_of_ten(4) == "(that's about 1,000)"
    assert describe_power_of_ten(2) == "(that's about 100)"
    assert describe_power_of_ten(0) == "(that's about 1)"
    assert describe_power_of_ten(-1) == "(that's about 0.1)"
    assert describe_power_of_ten(-2) == "(that's about 0.01)"
    assert describe_power_of_ten(-3) == "(that's about 0.001)"
    assert describe_power_of_ten(-5) == "(that's about 1.00e-5)"


def test_orders_off_line_plural():
    assert orders_off_line(1) == "You were 1 order of magnitude off"
    assert orders_off_line(0) == "You were 0 orders of magnitude off"
    assert orders_off_line(3) == "You were 3 orders of magnitude off"
