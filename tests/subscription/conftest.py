"""Fixtures for subscription tests."""

from collections.abc import Mapping
from typing import Any

import pytest


class RecordingChannel:
    """Channel test double recording pushes; ``listening`` controls its answer."""

    def __init__(self, listening: bool = True) -> None:
        self.listening = listening
        self.pushes: list[tuple[int, Mapping[str, Any]]] = []

    def push(self, subscription_id: int, document: Mapping[str, Any]) -> bool:
        if not self.listening:
            return False
        self.pushes.append((subscription_id, document))
        return True


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
