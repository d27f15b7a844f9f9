"""Tests for PR description ticket links."""

from inline_snapshot import snapshot

from skills_kit.tickets import (
    TICKETS_PLACEHOLDER,
    format_ticket_links,
    parse_ticket_ids,
    ticket_url,
)


def test_parse_ticket_ids_splits_commas_and_spaces():
    assert parse_ticket_ids(["PROJ-1, PROJ-2", "PROJ-3  PROJ-1", ""]) == [
        "PROJ-1",
        "PROJ-2",
        "PROJ-3",
    ]


def test_parse_ticket_ids_empty():
    assert parse_ticket_ids([]) == []
    assert parse_ticket_ids([" , "]) == []


def test_ticket_url_joins_with_single_slash():
    assert ticket_url("https://example.atlassian.net", "PROJ-1") == (
        "https://example.atlassian.net/PROJ-1"
    )
    assert ticket_url("https://example.atlassian.net/browse/", "PROJ-1") == (
        "https://example.atlassian.net/browse/PROJ-1"
    )


def test_format_ticket_links_with_base_url():
    links = format_ticket_links("https://example.atlassian.net/browse", ["PROJ-1", "PROJ-2"])
    assert links == snapshot("""\
- [PROJ-1](https://example.atlassian.net/browse/PROJ-1)
- [PROJ-2](https://example.atlassian.net/browse/PROJ-2)\
""")


def test_format_ticket_links_without_base_url():
    assert format_ticket_links(None, ["PROJ-1", "PROJ-2"]) == "- PROJ-1\n- PROJ-2"
    assert format_ticket_links("", ["PROJ-1"]) == "- PROJ-1"


def test_format_ticket_links_without_tickets():
    assert format_ticket_links("https://example.atlassian.net", []) == TICKETS_PLACEHOLDER
    assert format_ticket_links(None, []) == snapshot("- No related tickets")
