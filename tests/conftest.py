"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from guildbot.event import Dispatcher, HandlerRegistry


class Spy:
    """Callable that records every call it receives."""

    def __init__(self, result: Any = None, error: BaseException | None = None):
        self.calls: list[tuple[Any, ...]] = []
        self.result = result
        self.error = error

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def handlers() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def dispatcher(handlers: HandlerRegistry) -> Dispatcher:
    return Dispatcher(handlers)


@pytest.fixture
def make_spy() -> type[Spy]:
    return Spy
