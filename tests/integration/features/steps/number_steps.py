"""Step definitions for number service integration scenarios.

Live mode only: requests go to the API at TEST_BASE_URL and row counts are
read from TEST_DATABASE_URL.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List

from behave import given, then, when
from sqlalchemy import text as sql_text

logger = logging.getLogger(__name__)


def _parse_list(raw: str) -> List[int]:
    return [int(part.strip()) for part in raw.split(",") if part.strip()]


def _api_path(context: Any, path: str) -> str:
    return context.api_prefix.rstrip("/") + path


def _post_num(context: Any, value: int):
    resp = context.http.post(_api_path(context, "/put-num"), json={"num": value})
    logger.debug("put-num value=%s status=%s", value, resp.status_code)
    return resp


@given("the numbers {values} have been submitted")
def step_seed_numbers(context: Any, values: str) -> None:
    for value in _parse_list(values):
        resp = _post_num(context, value)
        assert resp.status_code == 200, f"seeding {value} failed: {resp.status_code} {resp.text}"


@when("I submit the number {value:d}")
def step_submit_number(context: Any, value: int) -> None:
    context.response = _post_num(context, value)


@when('I GET "{path}" without the API prefix')
def step_get_unprefixed(context: Any, path: str) -> None:
    context.response = context.http.get(path)


@when('I GET "{path}"')
def step_get(context: Any, path: str) -> None:
    context.response = context.http.get(_api_path(context, path))


@when("I POST \"{path}\" with body '{body}'")
def step_post_raw(context: Any, path: str, body: str) -> None:
    context.response = context.http.post(
        _api_path(context, path),
        content=body.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@then("the response code should be {code:d}")
def step_status(context: Any, code: int) -> None:
    resp = context.response
    assert resp.status_code == code, f"expected {code}, got {resp.status_code}: {resp.text}"


@then("the response body is the list {values}")
def step_body_list(context: Any, values: str) -> None:
    assert context.response.json() == _parse_list(values)


@then("the response body is an empty list")
def step_body_empty(context: Any) -> None:
    assert context.response.json() == []


@then('the response is problem json with code "{code}"')
def step_problem(context: Any, code: str) -> None:
    resp = context.response
    assert resp.headers.get("content-type", "").startswith("application/problem+json")
    body = json.loads(resp.text)
    assert body.get("code") == code, body


@then('the response header "{name}" is not empty')
def step_header_present(context: Any, name: str) -> None:
    assert context.response.headers.get(name, "").strip()


@then('the database holds {count:d} rows in "{table}"')
def step_row_count(context: Any, count: int, table: str) -> None:
    with context.db_engine.connect() as conn:
        actual = conn.execute(sql_text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
    assert actual == count, f"{table} has {actual} rows, expected {count}"
