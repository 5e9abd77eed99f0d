import math

from formatter import format_division, format_precise, safe_evaluate


def test_format_division_examples():
    assert format_division(10 / 2) == "5"
    assert format_division(1 / 4) == "0.25"
    assert format_division(10 / 3) == "3.3333333333"
    assert format_division(2 / 3) == "0.6666666667"
    assert format_division(-1 / 4) == "-0.25"


def test_format_division_never_leaves_trailing_zeros():
    for a in range(-20, 21):
        for b in range(1, 13):
            text = format_division(a / b)
            if "." in text:
                assert not text.endswith("0")
            assert not text.endswith(".")


def test_format_division_is_idempotent_on_clean_values():
    for text in ["0.125", "12.5", "3", "-7.0000000001"]:
        assert format_division(float(text)) == text


def test_format_division_non_finite():
    assert format_division(math.inf) == "Error"
    assert format_division(-math.inf) == "Error"
    assert format_division(math.nan) == "Error"


def test_format_division_negative_zero():
    assert format_division(-1e-12) == "0"


def test_format_precise_hides_float_noise():
    assert format_precise(0.1 + 0.2) == "0.3"
    assert format_precise(2 ** 0.5) == "1.41421356237"


def test_format_precise_integers():
    assert format_precise(8.0) == "8"
    assert format_precise(-0.0) == "0"
    assert format_precise(123456789012345.0) == "123456789012000"


def test_format_precise_exponent_forms():
    assert format_precise(1e21) == "1e+21"
    assert format_precise(1.5e-7) == "1.5e-7"
    assert format_precise(0.00001) == "0.00001"
    assert format_precise(math.inf) == "Error"


def test_safe_evaluate_picks_policy():
    assert safe_evaluate("10/4") == "2.5"
    assert safe_evaluate("10/3") == "3.3333333333"
    assert safe_evaluate("2^0.5") == "1.41421356237"
    assert safe_evaluate("0.1+0.2") == "0.3"


def test_safe_evaluate_failures():
    assert safe_evaluate("(2+") is None
    assert safe_evaluate("5/0") is None
    assert safe_evaluate("√(-4)") is None
    assert safe_evaluate("10^400") == "Error"
