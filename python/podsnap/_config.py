# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""podsnap settings from ``~/.podsnap/podsnap.yaml`` and ``<project>/.podsnap/podsnap.yaml``.

The project file overrides the user file key by key.  Values that podsnap
cannot use (an unknown sort field, a boolean spelled ``"maybe"``) leave the
default in place rather than failing the command.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

import yaml

from podsnap.dump import SORT_FIELDS

_CONFIG_DIRNAME = ".podsnap"
_CONFIG_FILENAME = "podsnap.yaml"

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})


@dataclasses.dataclass(frozen=True)
class PodSnapConfig:
    """Resolved podsnap configuration."""

    history_dir: Path | None = None
    auto_log: bool = True
    default_sort: str = "created"
    json_output: bool = False


def load_config(project_root: Path | None = None) -> PodSnapConfig:
    """Resolve settings for a run, with the project file taking precedence."""
    values: dict[str, Any] = {}
    for path in _config_files(project_root):
        values.update(_read_settings(path))
    return _build_config(values)


def _config_files(project_root: Path | None) -> list[Path]:
    """Existing config files, lowest precedence first."""
    roots = [Path.home()]
    if project_root is not None:
        roots.append(project_root)
    candidates = [root / _CONFIG_DIRNAME / _CONFIG_FILENAME for root in roots]
    return [path for path in candidates if path.is_file()]


def _read_settings(path: Path) -> dict[str, Any]:
    """Return the known settings in *path*; unreadable files contribute nothing.

    A relative ``history_dir`` is anchored at the directory that holds the
    ``.podsnap/`` folder, so a project can keep its history beside its code.
    """
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError:
        return {}
    if not isinstance(data, dict):
        return {}

    known = {f.name for f in dataclasses.fields(PodSnapConfig)}
    settings = {k: v for k, v in data.items() if k in known}
    history_dir = settings.get("history_dir")
    if isinstance(history_dir, str) and history_dir:
        resolved = Path(history_dir).expanduser()
        if not resolved.is_absolute():
            resolved = path.parent.parent / resolved
        settings["history_dir"] = resolved
    elif "history_dir" in settings:
        settings["history_dir"] = None
    return settings


def _as_bool(value: object, default: bool) -> bool:  # noqa: FBT001
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return default


def _build_config(values: dict[str, Any]) -> PodSnapConfig:
    """Validate merged settings into a ``PodSnapConfig``."""
    defaults = PodSnapConfig()
    sort = str(values.get("default_sort", defaults.default_sort)).lower()
    return PodSnapConfig(
        history_dir=values.get("history_dir"),
        auto_log=_as_bool(values.get("auto_log", defaults.auto_log), defaults.auto_log),
        default_sort=sort if sort in SORT_FIELDS else defaults.default_sort,
        json_output=_as_bool(values.get("json_output", defaults.json_output), defaults.json_output),
    )
