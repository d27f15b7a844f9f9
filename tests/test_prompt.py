from __future__ import annotations

import io
import sys

import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from skills_kit.prompt import prompt_line


@pytest.mark.asyncio
async def test_prompt_line_returns_stripped_answer() -> None:
    with create_pipe_input() as pipe_input:
        pipe_input.send_text("  https://example.atlassian.net  \r")
        answer = await prompt_line("Base URL: ", input=pipe_input, output=DummyOutput())
    assert answer == "https://example.atlassian.net"


@pytest.mark.asyncio
async def test_prompt_line_empty_submission() -> None:
    with create_pipe_input() as pipe_input:
        pipe_input.send_text("\r")
        answer = await prompt_line("Base URL: ", input=pipe_input, output=DummyOutput())
    assert answer == ""


@pytest.mark.asyncio
async def test_prompt_line_whitespace_only_is_empty() -> None:
    with create_pipe_input() as pipe_input:
        pipe_input.send_text("    \r")
        answer = await prompt_line("Base URL: ", input=pipe_input, output=DummyOutput())
    assert answer == ""


@pytest.mark.asyncio
async def test_prompt_line_end_of_input_is_declined() -> None:
    with create_pipe_input() as pipe_input:
        pipe_input.send_text("\x04")  # Ctrl-D on an empty line
        answer = await prompt_line("Base URL: ", input=pipe_input, output=DummyOutput())
    assert answer == ""


@pytest.mark.asyncio
async def test_prompt_line_reads_one_line_per_call() -> None:
    with create_pipe_input() as pipe_input:
        pipe_input.send_text("first\r")
        first = await prompt_line("1: ", input=pipe_input, output=DummyOutput())
        pipe_input.send_text("second\r")
        second = await prompt_line("2: ", input=pipe_input, output=DummyOutput())
    assert (first, second) == ("first", "second")


@pytest.mark.asyncio
async def test_prompt_line_piped_stdin_prompts_once_on_stderr(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    stdout, stderr = io.StringIO(), io.StringIO()
    monkeypatch.setattr(sys, "stdin", io.StringIO("  https://example.atlassian.net \nrest\n"))
    monkeypatch.setattr(sys, "stdout", stdout)
    monkeypatch.setattr(sys, "stderr", stderr)

    answer = await prompt_line("Base URL: ")

    assert answer == "https://example.atlassian.net"
    assert stderr.getvalue() == "Base URL: "
    assert stdout.getvalue() == ""
    assert sys.stdin.readline() == "rest\n"


@pytest.mark.asyncio
async def test_prompt_line_piped_stdin_at_eof_is_declined(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    monkeypatch.setattr(sys, "stderr", io.StringIO())

    assert await prompt_line("Base URL: ") == ""
