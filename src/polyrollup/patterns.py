"""Name rules deciding which numeric columns are averaged instead of summed."""

from __future__ import annotations

import re
from typing import Callable, Union

from polyrollup.errors import TypeMismatch

# Rates, ratios and per-unit metrics from web analytics exports
DEFAULT_MEAN_PATTERN = (
    r"^avg|^percent|Rate$|^CPC$|^CTR$|^CPM$|^RPC$|^ROI$|^ROAS$|Per"
)

NameRule = Union[str, re.Pattern, Callable[[str], bool]]


def compile_name_rule(rule: NameRule) -> Callable[[str], bool]:
    """
    Turn a name rule into a predicate over column names.

    Strings are compiled as regular expressions and matched anywhere in the
    name (``re.search``); compiled patterns are used as given; any other
    callable is used as the predicate directly.

    Raises:
        TypeMismatch: If the rule is of an unsupported kind or does not compile
    """
    if isinstance(rule, str):
        try:
            rule = re.compile(rule)
        except re.error as e:
            raise TypeMismatch(f"Invalid 'mean_name_pattern' {rule!r}: {e}") from e

    if isinstance(rule, re.Pattern):
        pattern = rule
        return lambda name: pattern.search(name) is not None

    if callable(rule):
        return lambda name: bool(rule(name))

    raise TypeMismatch(
        "'mean_name_pattern' must be a regex string, compiled pattern or callable, "
        f"got {type(rule).__name__}"
    )


def split_by_rule(
    names: list[str], rule: NameRule
) -> tuple[list[str], list[str]]:
    """Split names into (matching, non_matching), preserving order."""
    predicate = compile_name_rule(rule)
    matching: list[str] = []
    other: list[str] = []
    for name in names:
        (matching if predicate(name) else other).append(name)
    return matching, other
