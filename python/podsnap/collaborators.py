# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Interfaces of the runtime collaborators the builders read from.

All calls are plain blocking calls.  podsnap imposes no timeout and offers
no way to cancel a call in flight.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    import datetime
    from collections.abc import Sequence

    from podsnap.types import NamespaceDescriptor, PsOptions, StateBundle


class ContainerHandle(Protocol):
    """A live container; only its ID is read directly."""

    @property
    def id(self) -> str: ...


class PodHandle(Protocol):
    """A live pod."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def created_time(self) -> datetime.datetime: ...

    @property
    def cgroup_parent(self) -> str: ...

    def all_containers(self) -> Sequence[ContainerHandle]:
        """Enumerate member containers in a stable order."""
        ...

    def status(self) -> str:
        """Return the aggregate pod status string."""
        ...


NamespaceLookup = Callable[[int], "NamespaceDescriptor"]
"""Resolve the namespaces of a process by pid."""

StateQuery = Callable[["ContainerHandle", "PsOptions"], "StateBundle"]
"""Read one container's state bundle, honoring the list options."""
