from __future__ import annotations

import os
from pathlib import Path

SUBDIRS = ("profiles",)


def workspace_dir() -> Path:
    env = os.environ.get("FACTORIALS_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".factorials").resolve()


def profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def ensure_workspace() -> Path:
    root = workspace_dir()
    for sub in SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)
    return root
