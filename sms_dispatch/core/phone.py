import re

_NON_DIGITS = re.compile(r"[^0-9]")


def strip_non_digits(number: str) -> str:
    return _NON_DIGITS.sub("", str(number or ""))


def format_number(number: str, prefix: str = "+") -> str:
    """Reduce a free-form phone number to its ASCII digits behind ``prefix``.

    Length and country code are not validated. A number without digits comes
    back as the bare prefix, which callers must treat as invalid.
    """

    return f"{prefix}{strip_non_digits(number)}"
