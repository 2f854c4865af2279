from __future__ import annotations

import pprint
from typing import Any

from traitkit.stdtraits.equality import eq


class EqualityAssertionError(AssertionError):
    """Failed ``assert_equals``/``assert_uneq``; operands are kept pretty-printed."""

    def __init__(self, message: str, *, actual: str, expected: str, operator: str) -> None:
        super().__init__(f"{message}\nactual:\n{actual}\nexpected ({operator}):\n{expected}")
        self.message = message
        self.actual = actual
        self.expected = expected
        self.operator = operator


def pretty(value: Any) -> str:
    return pprint.pformat(value, width=1, sort_dicts=True)


def assert_equals(actual: Any, expected: Any, msg: str | None = None) -> None:
    if not eq(actual, expected):
        raise EqualityAssertionError(
            f"The values are not equal: {msg}" if msg else "The values are not equal!",
            actual=pretty(actual),
            expected=pretty(expected),
            operator="eq()",
        )


def assert_uneq(actual: Any, not_expected: Any, msg: str | None = None) -> None:
    if eq(actual, not_expected):
        raise EqualityAssertionError(
            f"The values should not be equal: {msg}" if msg else "The values should not be equal!",
            actual=pretty(actual),
            expected=pretty(not_expected),
            operator="!eq()",
        )


__all__ = [
    "EqualityAssertionError",
    "assert_equals",
    "assert_uneq",
    "pretty",
]
