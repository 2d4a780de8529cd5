"""
Response body helpers.

EFIHUB endpoints are not consistent about where they put a value: the same
field may live at the top level, under ``data``, or be ``data`` itself.
Callers describe the candidates as an ordered list of rules and take the
first one that matches.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import httpx

from efihub.exceptions import RemoteCallError

_MISSING = object()


def is_present(value: Any) -> bool:
    return value is not None


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A dotted key path plus the check a value found there must pass.

    Attributes:
        path: Dot-separated keys, e.g. ``"data.url"``. A single key reads
            the top level.
        accept: Predicate the value must satisfy to count as a match.
    """

    path: str
    accept: Callable[[Any], bool] = is_present


def dig(data: Any, path: str) -> Any:
    """
    Walk ``path`` through nested dicts.

    Returns:
        The value at ``path`` or None when any segment is missing.
    """
    current = data
    for segment in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return None
    return current


def first_match(data: Any, rules: Iterable[Rule]) -> Any:
    """
    Evaluate rules in order and return the first accepted value.

    Returns:
        Matched value, or None if no rule matched.
    """
    for rule in rules:
        value = dig(data, rule.path)
        if value is not None and rule.accept(value):
            return value
    return None


def json_body(response: httpx.Response) -> Any:
    """Decode the JSON body, treating an empty or non-JSON body as None."""
    try:
        return response.json()
    except ValueError:
        return None


def expect_success(response: httpx.Response, endpoint: str) -> Any:
    """
    Return the decoded body of a successful response.

    Raises:
        RemoteCallError: If the status is not 2xx.
    """
    if not response.is_success:
        msg = f"EFIHUB call failed with HTTP {response.status_code}"
        raise RemoteCallError(msg, code=response.status_code, endpoint=endpoint)
    return json_body(response)
