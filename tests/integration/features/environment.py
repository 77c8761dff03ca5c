"""Behave environment hooks for number service integration tests.

Loads variables from .env files, validates the live configuration and, for
local runs, boots a Uvicorn server when `TEST_BASE_URL` points at localhost
and nothing is listening yet. Every scenario starts from an empty `nums`
table in the database named by `TEST_DATABASE_URL`.
"""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import time
from typing import Any
from urllib.parse import urlparse

import httpx
from dotenv import load_dotenv
from sqlalchemy import create_engine, text


REQUIRED_ENV_VARS = (
    "TEST_BASE_URL",      # Base URL for the running API under test
    "TEST_DATABASE_URL",  # Database the API under test writes to
)


def _is_api_listening(base_url: str) -> bool:
    try:
        with httpx.Client(timeout=2.0) as client:
            client.get(base_url + "/health")
            return True
    except httpx.HTTPError:
        return False


def _choose_free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _start_local_api(context: Any, hostname: str) -> None:
    """Start `numsort.main:create_app` under uvicorn on a free port."""
    port = _choose_free_port(hostname)
    base = f"http://{hostname}:{port}"
    context.test_base_url = base
    os.environ["TEST_BASE_URL"] = base
    context._api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "numsort.main:create_app",
            "--factory",
            "--host",
            hostname,
            "--port",
            str(port),
            "--log-level",
            "warning",
        ],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        env=os.environ.copy(),
    )
    deadline = time.time() + 10.0
    while time.time() < deadline:
        if _is_api_listening(base):
            return
        time.sleep(0.2)
    raise AssertionError(f"API did not start at {base}")


def before_all(context: Any) -> None:
    """Validate mandatory environment for integration scenarios."""
    load_dotenv(override=False)
    load_dotenv(dotenv_path="tests/integration/.env.test", override=False)

    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    assert not missing, "Missing required environment variables: " + ", ".join(missing)

    context.test_base_url = os.environ["TEST_BASE_URL"].rstrip("/")
    context.test_database_url = os.environ["TEST_DATABASE_URL"]
    context.api_prefix = os.getenv("TEST_API_PREFIX", "/api/v1")
    # The application reads DATABASE_URL; mirror the test database when unset.
    os.environ.setdefault("DATABASE_URL", context.test_database_url)
    context._api_proc = None

    parsed = urlparse(context.test_base_url)
    host_is_local = parsed.hostname in {"localhost", "127.0.0.1", "::1"}
    prestarted = os.getenv("E2E_SKIP_SERVER", "").strip().lower() in {"1", "true", "yes", "on"}
    if host_is_local and not prestarted and not _is_api_listening(context.test_base_url):
        _start_local_api(context, parsed.hostname or "127.0.0.1")

    assert _is_api_listening(context.test_base_url), f"API not reachable at {context.test_base_url}"
    context.db_engine = create_engine(context.test_database_url, future=True)


def before_scenario(context: Any, scenario: Any) -> None:
    with context.db_engine.begin() as conn:
        conn.execute(text("DELETE FROM nums"))
    context.http = httpx.Client(base_url=context.test_base_url, timeout=10.0)
    context.response = None


def after_scenario(context: Any, scenario: Any) -> None:
    http = getattr(context, "http", None)
    if http is not None:
        http.close()


def after_all(context: Any) -> None:
    engine = getattr(context, "db_engine", None)
    if engine is not None:
        engine.dispose()
    proc = getattr(context, "_api_proc", None)
    if proc is not None:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
