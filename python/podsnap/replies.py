# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Classify the outcome of a pod-scoped operation into an RPC reply.

Precedence matters: a per-container error collection, even an empty one,
always wins over a terminal error, and the terminal error is dropped.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Union

from podsnap.types import PodContainerErrorData

if TYPE_CHECKING:
    from podsnap._logger import CallLogger

ERROR_OCCURRED = "io.podman.ErrorOccurred"
POD_CONTAINER_ERROR = "io.podman.PodContainerError"


@dataclasses.dataclass(frozen=True)
class ErrorOccurred:
    """Fatal reply: the whole operation failed with a single reason."""

    reason: str

    def to_wire(self) -> dict[str, object]:
        return {"error": ERROR_OCCURRED, "parameters": {"reason": self.reason}}


@dataclasses.dataclass(frozen=True)
class PodContainerError:
    """Partial reply: the pod operation ran but some containers failed."""

    pod_id: str
    errors: tuple[PodContainerErrorData, ...] = ()

    def to_wire(self) -> dict[str, object]:
        return {
            "error": POD_CONTAINER_ERROR,
            "parameters": {
                "podname": self.pod_id,
                "errors": [
                    {"containerid": e.container_id, "reason": e.reason} for e in self.errors
                ],
            },
        }


ReplyOutcome = Union[ErrorOccurred, PodContainerError]

ContainerErrors = Union[Mapping[str, BaseException], Iterable[tuple[str, BaseException]]]


def collect_container_errors(
    container_errors: ContainerErrors,
) -> tuple[PodContainerErrorData, ...]:
    """Flatten per-container errors into ordered ``(id, reason)`` records.

    Mappings keep their iteration (insertion) order.  The result holds
    exactly one entry per failure.
    """
    pairs = (
        container_errors.items() if isinstance(container_errors, Mapping) else container_errors
    )
    return tuple(
        PodContainerErrorData(container_id=ctr_id, reason=str(exc)) for ctr_id, exc in pairs
    )


class ReplyDispatcher:
    """Decides which reply a pod-scoped call sends."""

    def __init__(self, *, logger: CallLogger | None = None) -> None:
        self._logger = logger

    def dispatch(
        self,
        pod_id: str,
        container_errors: ContainerErrors | None,
        error: BaseException | None,
    ) -> ReplyOutcome | None:
        """Classify a pod call's result.

        - *container_errors* given (even empty): :class:`PodContainerError`
          for *pod_id*; *error* is ignored.
        - only *error* given: :class:`ErrorOccurred` with ``str(error)``.
        - neither: ``None``, the caller replies with its own success value.
        """
        outcome: ReplyOutcome | None = None
        if container_errors is not None:
            outcome = PodContainerError(
                pod_id=pod_id, errors=collect_container_errors(container_errors)
            )
        elif error is not None:
            outcome = ErrorOccurred(reason=str(error))

        if outcome is not None and self._logger is not None:
            self._logger.log_reply(outcome)
        return outcome
