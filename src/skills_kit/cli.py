import asyncio
import json
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from skills_kit.constant import VERSION
from skills_kit.exception import ConfigError, SkillsKitException

_LOG_LEVEL_OPTION = "--log-level"
_DEFAULT_LOG_LEVEL_KEY = "default"

err_console = Console(stderr=True)

_root_option = click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Project root holding skills-configs.json. Default: current directory.",
)


def _fail(error: BaseException | str) -> NoReturn:
    message = error.message if isinstance(error, SkillsKitException) else str(error)
    err_console.print(f"[red]Error: {escape(message)}[/red]", highlight=False, soft_wrap=True)
    sys.exit(1)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(VERSION)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log debug information to stderr. Default: no.",
)
@click.option(
    "--log-level",
    "-L",
    "log_level_override",
    multiple=True,
    help=(
        "Override log level per module. Use `module=LEVEL` to target a specific module "
        "(e.g. `-L skills_kit.configs=DEBUG`) or just `LEVEL` to change the default level."
    ),
)
def skills_kit(debug: bool, log_level_override: tuple[str, ...]):
    """Helper scripts used by agent skills."""
    from skills_kit.utils.logging import configure_logging, logger

    logger.enable("skills_kit")
    cli_levels = _parse_log_level_overrides(log_level_override)
    base_level = "TRACE" if debug else "WARNING"
    try:
        configure_logging(sys.stderr, base_level=base_level, module_levels=cli_levels)
    except ValueError as exc:
        raise click.BadOptionUsage(_LOG_LEVEL_OPTION, str(exc)) from exc


@skills_kit.command("configs")
@_root_option
def configs_cmd(root: Path | None):
    """Resolve skills-configs.json, prompting for missing keys, and print it as JSON."""
    from skills_kit.configs import resolve_configs

    try:
        configs = asyncio.run(resolve_configs(root or Path.cwd()))
    except (OSError, SkillsKitException) as e:
        _fail(e)
    click.echo(json.dumps(configs, ensure_ascii=False, separators=(",", ":")))


@skills_kit.command("tasks-url")
@_root_option
def tasks_url_cmd(root: Path | None):
    """Print the tasks manager base URL, prompting for it if needed.

    Exit codes:
        0: URL printed
        1: No URL configured or configuration could not be written
    """
    from skills_kit.configs import get_tasks_manager_base_url

    try:
        base_url = asyncio.run(get_tasks_manager_base_url(root or Path.cwd()))
    except (OSError, SkillsKitException) as e:
        _fail(e)
    if base_url is None:
        _fail("No tasks manager base URL configured")
    click.echo(base_url)


@skills_kit.command("ticket-links")
@_root_option
@click.option(
    "--no-prompt",
    is_flag=True,
    default=False,
    help="Use the stored base URL only, never prompt. Default: no.",
)
@click.argument("tickets", nargs=-1)
def ticket_links_cmd(root: Path | None, no_prompt: bool, tickets: tuple[str, ...]):
    """Print Markdown links for TICKETS (comma or space separated ids)."""
    from skills_kit.configs import (
        get_tasks_manager_base_url,
        load_configs,
        tasks_manager_base_url,
    )
    from skills_kit.tickets import format_ticket_links, parse_ticket_ids

    root = root or Path.cwd()
    ticket_ids = parse_ticket_ids(tickets)
    base_url: str | None = None
    if ticket_ids:
        if no_prompt:
            base_url = tasks_manager_base_url(load_configs(root))
        else:
            try:
                base_url = asyncio.run(get_tasks_manager_base_url(root))
            except (OSError, SkillsKitException) as e:
                _fail(e)
    click.echo(format_ticket_links(base_url, ticket_ids))


@skills_kit.command("os-infos")
def os_infos_cmd():
    """Print the OS architecture and type as JSON."""
    from skills_kit.sysinfo import collect_os_infos

    click.echo(json.dumps(collect_os_infos(), separators=(",", ":")))


@skills_kit.command("username")
def username_cmd():
    """Print the current user's login name."""
    from skills_kit.sysinfo import collect_username

    click.echo(collect_username())


@skills_kit.command("lint-todos")
@click.argument(
    "paths", type=click.Path(exists=True, path_type=Path), nargs=-1, required=True
)
@click.option("--pattern", type=str, default=None, help="Ticket id regex.")
@click.option(
    "--term",
    "terms",
    multiple=True,
    help="Comment term requiring a ticket (repeatable). Default: TODO.",
)
@click.option(
    "--comment-pattern",
    type=str,
    default=None,
    help="Regex a whole comment must match instead of the term/pattern check.",
)
@click.option("--description", type=str, default=None, help="Hint appended to messages.")
def lint_todos_cmd(
    paths: tuple[Path, ...],
    pattern: str | None,
    terms: tuple[str, ...],
    comment_pattern: str | None,
    description: str | None,
):
    """Check that TODO comments in Python files reference a ticket.

    Exit codes:
        0: No findings
        1: Findings reported
        2: Invalid options
    """
    from skills_kit.todo_lint import TicketRefOptions, scan_paths

    raw: dict[str, object] = {}
    if pattern is not None:
        raw["pattern"] = pattern
    if terms:
        raw["terms"] = list(terms)
    if comment_pattern is not None:
        raw["commentPattern"] = comment_pattern
    if description is not None:
        raw["description"] = description
    try:
        options = TicketRefOptions.from_dict(raw)
    except ConfigError as e:
        raise click.BadParameter(e.message) from e

    findings = scan_paths(paths, options)
    for finding in findings:
        click.echo(finding.format())
    if findings:
        sys.exit(1)


def _parse_log_level_overrides(values: tuple[str, ...]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for raw in values:
        entry = raw.strip()
        if not entry:
            raise click.BadOptionUsage(_LOG_LEVEL_OPTION, "Log level override cannot be empty")
        if "=" in entry:
            module, level = entry.split("=", 1)
            module = module.strip()
            if not module:
                raise click.BadOptionUsage(
                    _LOG_LEVEL_OPTION,
                    "Module name is required before '=' when using --log-level",
                )
        else:
            module = _DEFAULT_LOG_LEVEL_KEY
            level = entry
        level = level.strip()
        if not level:
            raise click.BadOptionUsage(_LOG_LEVEL_OPTION, "Log level cannot be empty")
        overrides[_normalize_module_key(module)] = level
    return overrides


def _normalize_module_key(module: str) -> str:
    normalized = module.strip().rstrip(".").lower()
    if not normalized:
        return _DEFAULT_LOG_LEVEL_KEY
    return normalized


def main():
    skills_kit()


if __name__ == "__main__":
    main()
