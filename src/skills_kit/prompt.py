"""Interactive single-line prompt on the operator's terminal."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager

from prompt_toolkit import PromptSession
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import Input
from prompt_toolkit.output import Output, create_output

from skills_kit.utils.logging import logger

LinePrompter = Callable[[str], Awaitable[str]]


@contextmanager
def _line_reader(
    input: Input | None = None, output: Output | None = None
) -> Iterator[PromptSession[str]]:
    """Open a terminal session for a single read; it is released on exit."""
    if output is None:
        # Draw on whichever stream is a terminal so a piped stdout stays clean.
        output = create_output(always_prefer_tty=True)
    with create_app_session(input=input, output=output):
        yield PromptSession(input=input, output=output)


def _stdin_is_tty() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


async def _read_piped_line(message: str) -> str:
    """Read one line from a non-interactive stdin, showing `message` once on stderr."""
    sys.stderr.write(message)
    sys.stderr.flush()
    if sys.stdin is None:
        return ""
    line = await asyncio.to_thread(sys.stdin.readline)
    if not line:
        logger.debug("Input closed while prompting: {message}", message=message)
    return line.strip()


async def prompt_line(
    message: str,
    *,
    input: Input | None = None,
    output: Output | None = None,
) -> str:
    """
    Show `message` and wait for the operator to submit one line.

    Returns the line stripped of surrounding whitespace. An empty submission or
    end of input both return an empty string. Ctrl-C is not caught.

    When stdin is not a terminal and no `input` is given, the line is read
    directly from stdin and the prompt is written once to stderr, keeping
    stdout free for command output.
    """
    if input is None and output is None and not _stdin_is_tty():
        return await _read_piped_line(message)

    with _line_reader(input, output) as session:
        try:
            answer = await session.prompt_async(message)
        except EOFError:
            logger.debug("Input closed while prompting: {message}", message=message)
            return ""
    return (answer or "").strip()
