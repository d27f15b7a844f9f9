from __future__ import annotations

from collections.abc import Iterator

import pytest

from skills_kit.utils.logging import logger


class FakePrompter:
    """Replays canned answers and records the prompts it was asked."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    async def __call__(self, message: str) -> str:
        self.prompts.append(message)
        return self._answers.pop(0) if self._answers else ""


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    logger.enable("skills_kit")
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="WARNING")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
        logger.disable("skills_kit")


@pytest.fixture
def make_prompter() -> type[FakePrompter]:
    return FakePrompter
