from __future__ import annotations

import tomllib as toml  # py311+
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from factorials.utility import UserInputError
from factorials.workspace import profiles_dir


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (FILE.stem if not provided in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profile_path(name: str) -> Path:
    return profiles_dir() / f"{name}.toml"


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    if "_PROFILE_" in raw:
        raw = {k: v for k, v in raw.items() if k != "_PROFILE_"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return raw, name, description


# --- Public API ------------------------------------------------------------


def list_profiles() -> list[str]:
    """Return the available profile *names* (filename stems)."""
    pdir = profiles_dir()
    if not pdir.exists():
        return []
    return sorted(p.stem for p in pdir.glob("*.toml"))


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | Path | None = None) -> Settings:
    """
    Load a profile by name (default 'default') or by explicit path, strip the
    [_PROFILE_] metadata and return Settings(data=..., name=..., description=..., _source=path).
    """
    if isinstance(name, Path):
        path = name
    else:
        path = _profile_path(name or "default")
    if not path.exists():
        raise FileNotFoundError(f"Profile '{path.stem}' not found at {path}")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)

    # Keep only booleans for the flag-style sections
    behaviour = data.get("BEHAVIOUR", {}) or {}
    data["BEHAVIOUR"] = {str(k): v for k, v in behaviour.items() if isinstance(v, bool)}

    factorial = data.get("FACTORIAL", {}) or {}
    if "BIT_LIMIT" in factorial and not isinstance(factorial["BIT_LIMIT"], int):
        raise UserInputError(f"reading {path.name}: FACTORIAL.BIT_LIMIT must be an integer.")
    data["FACTORIAL"] = dict(factorial)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
