from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


class RecordingHandler:
    r"""Mock transport handler that replays scripted outcomes.

    Each outcome is either a status code, an ``httpx.Response`` or an
    exception instance to raise. The last outcome is repeated once the
    script is exhausted. Every request seen is recorded.
    """

    def __init__(self, outcomes: Iterable[int | httpx.Response | Exception]) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(outcome, text=f"status {outcome}")


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Create a RecordingHandler from scripted outcomes."""
    return lambda *outcomes: RecordingHandler(outcomes)


@pytest.fixture
def make_client() -> Callable[[RecordingHandler], httpx.Client]:
    """Create an httpx.Client backed by a mock transport."""
    return lambda handler: httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def make_async_client() -> Callable[[RecordingHandler], httpx.AsyncClient]:
    """Create an httpx.AsyncClient backed by a mock transport."""
    return lambda handler: httpx.AsyncClient(transport=httpx.MockTransport(handler))
