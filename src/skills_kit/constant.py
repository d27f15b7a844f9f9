from __future__ import annotations

import importlib.metadata

NAME = importlib.metadata.metadata("skills-kit")["Name"]
VERSION = importlib.metadata.version("skills-kit")
