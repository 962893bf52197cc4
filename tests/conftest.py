"""Pytest fixtures and fakes for gateway tests"""
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from gamevault.core.admission import AdmissionController
from gamevault.core.cache import ResponseCache


class FakeClock:
    """A manually advanced clock usable for both wall and monotonic time."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Records requested delays; optionally advances a FakeClock so polling loops make progress."""

    def __init__(self, clock: Optional[FakeClock] = None):
        self.delays: List[float] = []
        self._clock = clock

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self._clock is not None:
            self._clock.advance(delay)


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, headers: Optional[Dict[str, str]] = None, text: Optional[str] = None):
        self.status = status
        self._payload = payload
        self.headers = headers or {}
        self._text = text if text is not None else json.dumps(payload)

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc) -> None:
        return None


class FakeSession:
    """
    Stands in for aiohttp.ClientSession.post. Each call pops the next scripted
    outcome: a FakeResponse, or an exception instance to raise.
    """

    def __init__(self, outcomes: Optional[List[Any]] = None):
        self.outcomes = list(outcomes or [])
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((url, kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class StaticTokens:
    """TokenManager double that always hands out the same token."""
    client_id = "test-client"

    def __init__(self):
        self.calls = 0

    async def get_token(self) -> str:
        self.calls += 1
        return "test-token"


class FakeIGDBClient:
    """
    IGDBClient double for catalog tests. `responder(resource, body)` decides the
    payload for each call; every call is recorded in `sent`.
    """

    def __init__(self, responder: Callable[[str, str], Any]):
        self._responder = responder
        self.sent: List[Tuple[str, str]] = []

    async def send(self, resource: str, body: str) -> Any:
        self.sent.append((resource, body))
        result = self._responder(resource, body)
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def admission(clock) -> AdmissionController:
    return AdmissionController(clock=clock, sleep=RecordingSleep(clock))


@pytest.fixture
def trending_cache(clock) -> ResponseCache:
    return ResponseCache(ttl=60, clock=clock)


@pytest.fixture
def sample_games() -> List[Dict[str, Any]]:
    return [
        {
            "id": 10,
            "name": "Hollow Knight",
            "cover": {"id": 1, "url": "//images.igdb.com/igdb/image/upload/t_thumb/co1.jpg"},
            "platforms": [{"id": 6, "abbreviation": "PC"}],
            "total_rating": 90.1,
            "total_rating_count": 800,
        },
        {
            "id": 20,
            "name": "Celeste",
            "cover": {"id": 2, "url": "//images.igdb.com/igdb/image/upload/t_thumb/co2.jpg"},
            "total_rating": 91.5,
            "total_rating_count": 600,
        },
        {
            "id": 30,
            "name": "Hades",
            "total_rating": 93.0,
            "total_rating_count": 700,
        },
    ]
