import httpx
import pytest

from efihub.api.response import Rule, dig, expect_success, first_match, is_string, json_body
from efihub.exceptions import RemoteCallError
from efihub.tests.utils.mock_transport import make_response


def test_dig_walks_nested_dicts() -> None:
    assert dig({"data": {"url": "https://cdn/x"}}, "data.url") == "https://cdn/x"
    assert dig({"data": "https://cdn/x"}, "data.url") is None
    assert dig(None, "data") is None
    assert dig(["data"], "data") is None


def test_first_match_respects_rule_order() -> None:
    body = {"url": "top", "data": {"url": "nested"}}

    assert first_match(body, [Rule("data.url"), Rule("url")]) == "nested"
    assert first_match(body, [Rule("url"), Rule("data.url")]) == "top"


def test_first_match_skips_rejected_values() -> None:
    body = {"data": {"url": None}, "url": 5, "fallback": "ok"}

    rules = [Rule("data.url", is_string), Rule("url", is_string), Rule("fallback", is_string)]

    assert first_match(body, rules) == "ok"


def test_first_match_keeps_falsy_present_values() -> None:
    assert first_match({"exists": False, "data": True}, [Rule("exists"), Rule("data")]) is False


def test_first_match_returns_none_when_nothing_matches() -> None:
    assert first_match({}, [Rule("a"), Rule("b.c")]) is None


def test_json_body_treats_invalid_json_as_none() -> None:
    assert json_body(make_response(content=b"not json")) is None
    assert json_body(make_response(content=b"")) is None
    assert json_body(make_response(json_data={"a": 1})) == {"a": 1}


def test_expect_success_returns_body() -> None:
    assert expect_success(make_response(json_data={"ok": True}), "/x") == {"ok": True}


@pytest.mark.parametrize("status", [400, 404, 422, 500])
def test_expect_success_raises_remote_call_error(status: int) -> None:
    with pytest.raises(RemoteCallError) as exc_info:
        expect_success(make_response(status, json_data={}), "/storage/url")

    assert exc_info.value.code == status
    assert exc_info.value.endpoint == "/storage/url"


def test_expect_success_accepts_any_2xx() -> None:
    assert expect_success(make_response(httpx.codes.NO_CONTENT), "/x") is None
