import pytest

from plugins.scientific_calculator.core import CalculatorSettings, KeypadError, load_settings, press_key
from plugins.scientific_calculator.core.keypad import KEYPAD_KEYS, KEYPAD_LAYOUT


def _press_all(keys, display=""):
    for key in keys:
        display = press_key(display, key)
    return display


def test_keys_append_and_equals_evaluates():
    display = _press_all(["2", "+", "3", "*", "4"])
    assert display == "2+3*4"
    assert press_key(display, "=") == "14.0"


def test_function_keys_append_names():
    assert _press_all(["sin", "(", "9", "0", ")", "="]) == "1.0"


def test_clear_and_delete():
    assert press_key("12+3", "C") == ""
    assert press_key("12+3", "DEL") == "12+"
    assert press_key("", "DEL") == ""


def test_error_display_is_replaced_on_next_key():
    display = press_key("2+", "=")
    assert display == "Error"
    assert press_key(display, "7") == "7"
    assert press_key(display, "DEL") == "Erro"


def test_equals_on_empty_display_is_error():
    assert press_key("", "=") == "Error"


def test_division_by_zero_shows_infinity():
    assert _press_all(["1", "/", "0", "="]) == "Infinity"


def test_unknown_key_rejected():
    with pytest.raises(KeypadError):
        press_key("", "mod")


def test_settings_limit_equals():
    settings = CalculatorSettings(max_expression_length=3, max_depth=10)
    assert press_key("1+2", "=", settings=settings) == "3.0"
    assert press_key("1+2+3", "=", settings=settings) == "Error"


def test_layout_has_every_function_key():
    assert {"sin", "cos", "tan", "ln", "log", "sqrt", "exp", "abs", "pi", "e"} <= KEYPAD_KEYS
    assert all(len(row) >= 7 for row in KEYPAD_LAYOUT)


def test_load_settings_falls_back_on_bad_values():
    settings = load_settings({"max_expression_length": "lots", "max_depth": -5})
    assert settings.max_expression_length is None
    assert settings.max_depth == 1
    assert load_settings(None) == CalculatorSettings()
    assert load_settings({"max_depth": "12"}).max_depth == 12


@pytest.mark.parametrize("bad", [float("inf"), float("-inf"), "1e400", float("nan"), "nan"])
def test_load_settings_ignores_non_finite_values(bad):
    settings = load_settings({"max_depth": bad, "max_expression_length": bad})
    assert settings == CalculatorSettings()


def test_load_settings_reads_length_cap():
    assert load_settings({"max_expression_length": 64}).max_expression_length == 64
    assert load_settings({}).max_expression_length is None


def test_exponent_form_result_cannot_be_extended():
    display = _press_all(["1", "/", "1", "0", "0", "0", "0", "0", "="])
    assert display == "1e-05"
    assert _press_all(["*", "2", "="], display) == "Error"
