"""Conversion of minilang values to the text that is shown for them. minilang numbers are always floats, but integral
numbers are displayed without a fractional part so that `print(5)` shows `5`.
"""

import re

# integral floats at least this large are shown in exponent notation instead of as (very long) integers
EXPONENT_THRESHOLD = 1e21

EXPONENT_PADDING = re.compile(r"e([+-])0+(?=\d)")


def format_number(num):
    """Returns the shortest text for float num: '5' for 5.0, '0.5' for 0.5, '1e+21' for 1e21, '1e-7' for 1e-7. The
    text lexes back to num.
    """
    if num.is_integer() and abs(num) < EXPONENT_THRESHOLD:
        return str(int(num))
    return EXPONENT_PADDING.sub(r"e\1", repr(num))


def format_value(value):
    """Returns the text printed for value (a bool, float or str)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        return format_number(value)
    return str(value)
