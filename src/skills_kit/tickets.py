"""Ticket links for generated pull request descriptions."""

from __future__ import annotations

import re
from collections.abc import Iterable

TICKETS_PLACEHOLDER = "- No related tickets"

_SEPARATORS = re.compile(r"[,\s]+")


def parse_ticket_ids(values: Iterable[str]) -> list[str]:
    """Split operator input on commas and whitespace, keeping first occurrences in order."""
    ticket_ids: list[str] = []
    for value in values:
        for ticket_id in _SEPARATORS.split(value):
            if ticket_id and ticket_id not in ticket_ids:
                ticket_ids.append(ticket_id)
    return ticket_ids


def ticket_url(base_url: str, ticket_id: str) -> str:
    return f"{base_url.rstrip('/')}/{ticket_id}"


def format_ticket_links(base_url: str | None, ticket_ids: list[str]) -> str:
    """
    Render the tickets section of a PR description as a Markdown list.

    Without a base URL, ticket identifiers are listed as plain text.
    """
    if not ticket_ids:
        return TICKETS_PLACEHOLDER

    lines: list[str] = []
    for ticket_id in ticket_ids:
        if base_url:
            lines.append(f"- [{ticket_id}]({ticket_url(base_url, ticket_id)})")
        else:
            lines.append(f"- {ticket_id}")
    return "\n".join(lines)
