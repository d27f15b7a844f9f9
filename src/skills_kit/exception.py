from __future__ import annotations


class SkillsKitException(Exception):
    """Base exception class for skills-kit."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigError(SkillsKitException, ValueError):
    """Configuration error."""

    pass
