"""Project-local skill configuration, resolved interactively when keys are missing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NamedTuple

from skills_kit.prompt import LinePrompter, prompt_line
from skills_kit.utils.logging import logger

CONFIG_FILENAME = "skills-configs.json"

TASKS_MANAGER_BASE_URL_KEY = "tasksManagerSystemBaseUrl"


class KnownKey(NamedTuple):
    """A configuration key that is prompted for when missing."""

    key: str
    prompt: str


KNOWN_KEYS: tuple[KnownKey, ...] = (
    KnownKey(
        TASKS_MANAGER_BASE_URL_KEY,
        "Tasks manager base URL (e.g. https://your-company.atlassian.net): ",
    ),
)


def config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def load_configs(root: Path) -> dict[str, Any]:
    """
    Load the configuration object stored under `root`.

    A missing file yields an empty mapping. An unreadable or malformed file also
    yields an empty mapping; a warning is logged and its content is not recovered.
    """
    path = config_path(root)
    if not path.is_file():
        return {}

    try:
        parsed: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file {path}: {error}", path=path, error=e)
        return {}

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        logger.warning(
            "Ignoring config file {path}: expected a JSON object, got {kind}",
            path=path,
            kind=type(parsed).__name__,
        )
        return {}
    return dict(parsed)


def save_configs(root: Path, configs: dict[str, Any]) -> None:
    """Write `configs` as indented JSON, replacing any existing file."""
    path = config_path(root)
    path.write_text(json.dumps(configs, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.debug("Wrote {count} config entries to {path}", count=len(configs), path=path)


async def resolve_configs(
    root: Path,
    *,
    prompter: LinePrompter | None = None,
    known_keys: tuple[KnownKey, ...] = KNOWN_KEYS,
) -> dict[str, Any]:
    """
    Load the configuration and prompt for every known key that is missing or empty.

    Answers are persisted in a single write once all prompts are done, and only
    if at least one key was added. Returns all entries, known or not.
    """
    if prompter is None:
        prompter = prompt_line

    configs = load_configs(root)
    changed = False
    for known in known_keys:
        if configs.get(known.key):
            continue
        logger.debug("Prompting for missing config key: {key}", key=known.key)
        answer = (await prompter(known.prompt)).strip()
        if answer:
            configs[known.key] = answer
            changed = True
        else:
            logger.info("No value given for config key: {key}", key=known.key)

    if changed:
        save_configs(root, configs)
    return configs


def tasks_manager_base_url(configs: dict[str, Any]) -> str | None:
    """The stored base URL, or None when it is missing, empty or not a string."""
    value = configs.get(TASKS_MANAGER_BASE_URL_KEY)
    if isinstance(value, str) and value:
        return value
    return None


async def get_tasks_manager_base_url(
    root: Path, *, prompter: LinePrompter | None = None
) -> str | None:
    """Resolve the configuration and return the tasks manager base URL, if any."""
    configs = await resolve_configs(root, prompter=prompter)
    return tasks_manager_base_url(configs)
