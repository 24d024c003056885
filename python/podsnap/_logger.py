# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Fire-and-forget call history written to disk as JSON lines.

All I/O is synchronous filesystem writes.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from podsnap.replies import ReplyOutcome


class CallLogger:
    """Appends one entry per snapshot, abort and reply to ``history.jsonl``."""

    def __init__(self, history_dir: Path | None, *, enabled: bool = True) -> None:
        self._history_dir = history_dir
        self._enabled = enabled and history_dir is not None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def history_path(self) -> Path | None:
        if self._history_dir is None:
            return None
        return self._history_dir / "history.jsonl"

    def log_snapshot(self, kind: str, ids: Iterable[str]) -> None:
        """Record that snapshots of *kind* were built for *ids*."""
        self.append_history({"type": "snapshot", "kind": kind, "ids": list(ids)})

    def log_abort(self, pod_id: str, container_id: str, error: BaseException) -> None:
        """Record a pod build aborted by a failing member container."""
        self.append_history(
            {
                "type": "abort",
                "pod_id": pod_id,
                "container_id": container_id,
                "error": str(error),
            }
        )

    def log_reply(self, outcome: ReplyOutcome) -> None:
        """Record the reply a dispatcher decided on."""
        entry: dict[str, object] = {"type": "reply"}
        entry.update(outcome.to_wire())
        self.append_history(entry)

    def append_history(self, entry: dict[str, object]) -> None:
        """Append one JSONL line to ``history.jsonl``."""
        path = self.history_path
        if not self._enabled or path is None:
            return
        entry.setdefault("timestamp", datetime.now(tz=timezone.utc).isoformat())
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a") as f:
            f.write(json.dumps(entry, default=str) + "\n")
