"""Shared fixtures for the xapi-client test suite."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from xapi_client.builders import (
    create_activity,
    create_actor,
    create_statement,
    create_verb,
)
from xapi_client.client import LRSClient
from xapi_client.core.enums import Verbs
from xapi_client.core.models import Activity, Actor, Statement, Verb

ENDPOINT = "https://lrs.example.com/api"


# ---------------------------------------------------------------------------
# Fake LRS
# ---------------------------------------------------------------------------

class FakeLRS:
    """Records every request and answers with a canned response."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        text: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = ["stored-id"] if body is None else body
        self.text = text
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_payload(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def fake_lrs() -> FakeLRS:
    return FakeLRS()


@pytest_asyncio.fixture
async def lrs_client(fake_lrs: FakeLRS):
    """A configured client wired to ``fake_lrs``."""
    client = LRSClient(transport=fake_lrs.transport)
    client.configure(ENDPOINT, "user", "secret")
    async with client:
        yield client


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_actor() -> Actor:
    return create_actor("Ada Lovelace", "ada@example.com")


@pytest.fixture
def sample_verb() -> Verb:
    return create_verb(Verbs.COMPLETED, "completed")


@pytest.fixture
def sample_activity() -> Activity:
    return create_activity(
        "https://example.com/lessons/intro",
        "Introduction",
        "The first lesson of the course",
    )


@pytest.fixture
def sample_statement(sample_actor, sample_verb, sample_activity) -> Statement:
    return create_statement(sample_actor, sample_verb, sample_activity)


@pytest.fixture
def bare_statement(sample_actor, sample_verb, sample_activity) -> Statement:
    """A statement without id or timestamp."""
    return Statement(actor=sample_actor, verb=sample_verb, activity=sample_activity)
