"""Require a ticket reference in TODO comments of Python sources."""

from __future__ import annotations

import io
import re
import tokenize
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from skills_kit.exception import ConfigError
from skills_kit.utils.logging import logger

DEFAULT_TICKET_PATTERN = r"([A-Z]+-\d+)"


class TicketRefOptions(BaseModel):
    """Options of the ticket reference rule."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    pattern: str = Field(default=DEFAULT_TICKET_PATTERN, description="Ticket id regex")
    terms: list[str] = Field(default_factory=lambda: ["TODO"], min_length=1)
    comment_pattern: str | None = Field(
        default=None,
        alias="commentPattern",
        description="Regex a whole comment must match, replaces the term/pattern check",
    )
    description: str | None = None
    comment: str | None = Field(default=None, description="Accepted and ignored")

    @field_validator("pattern", "comment_pattern")
    @classmethod
    def _check_regex(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> TicketRefOptions:
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid ticket-ref options: {e}") from e

    def term_regex(self, term: str) -> re.Pattern[str]:
        if self.comment_pattern:
            return re.compile(self.comment_pattern, re.IGNORECASE)
        return re.compile(rf"{term}\s?\(({self.pattern}[,\s]*)+\)", re.IGNORECASE)

    def message(self, term: str) -> str:
        prefix = f"{term} comment doesn't reference a ticket number."
        if self.description:
            return f"{prefix} {self.description}"
        if self.comment_pattern:
            return f"{prefix} Comment pattern: {self.comment_pattern}"
        return f"{prefix} Ticket pattern: {self.pattern}"


@dataclass(frozen=True, slots=True)
class TodoFinding:
    path: Path | None
    line: int
    column: int
    term: str
    message: str

    def format(self) -> str:
        location = f"{self.path}:" if self.path is not None else ""
        return f"{location}{self.line}:{self.column}: {self.message}"


def _iter_comments(source: str) -> Iterable[tokenize.TokenInfo]:
    for token in tokenize.generate_tokens(io.StringIO(source).readline):
        if token.type == tokenize.COMMENT:
            yield token


def scan_source(
    source: str, options: TicketRefOptions | None = None, *, path: Path | None = None
) -> list[TodoFinding]:
    """
    Report every comment that mentions a term without a ticket reference.

    Raises `tokenize.TokenError` or `SyntaxError` if `source` cannot be tokenized.
    """
    options = options or TicketRefOptions()
    regexes = {term: options.term_regex(term) for term in options.terms}

    findings: list[TodoFinding] = []
    for token in _iter_comments(source):
        value = token.string[1:]
        for term in options.terms:
            if term not in value:
                continue
            if regexes[term].search(value):
                continue
            line, column = token.start
            findings.append(
                TodoFinding(
                    path=path,
                    line=line,
                    column=column,
                    term=term,
                    message=options.message(term),
                )
            )
    return findings


def _iter_python_files(paths: Iterable[Path]) -> Iterable[Path]:
    for path in paths:
        if path.is_dir():
            yield from sorted(p for p in path.rglob("*.py") if p.is_file())
        else:
            yield path


def scan_paths(
    paths: Iterable[Path], options: TicketRefOptions | None = None
) -> list[TodoFinding]:
    """Scan files and directories (recursively, `*.py`); untokenizable files are skipped."""
    options = options or TicketRefOptions()
    findings: list[TodoFinding] = []
    for file in _iter_python_files(paths):
        try:
            # honors PEP 263 coding declarations and a UTF-8 BOM
            with tokenize.open(file) as f:
                source = f.read()
            findings.extend(scan_source(source, options, path=file))
        except (OSError, UnicodeDecodeError, tokenize.TokenError, SyntaxError) as e:
            logger.warning("Skipping {file}: cannot tokenize: {error}", file=file, error=e)
    return findings
