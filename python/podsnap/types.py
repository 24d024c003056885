# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Immutable records crossing the runtime -> RPC boundary.

Input records (``ContainerConfig``, ``StateBundle``, ...) describe what the
runtime collaborators hand over.  Output records (``ContainerSnapshot``,
``PodSnapshot``, ...) are what gets rendered onto the wire by
:mod:`podsnap.wire`.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import datetime


class ContainerState(str, enum.Enum):
    """Run state of a single container."""

    UNKNOWN = "unknown"
    CONFIGURED = "configured"
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"
    PAUSED = "paused"
    EXITED = "exited"
    REMOVING = "removing"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> ContainerState:
        """Parse a state name case-insensitively, defaulting to ``UNKNOWN``."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.UNKNOWN


# --- Collaborator input ---


@dataclasses.dataclass(frozen=True)
class SourceMount:
    """A mount as recorded in the container's runtime spec."""

    destination: str
    type: str = ""
    source: str = ""
    options: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class SourcePortMapping:
    """A port mapping as recorded in the container config (integer ports)."""

    host_port: int
    container_port: int
    host_ip: str = ""
    protocol: str = "tcp"


@dataclasses.dataclass(frozen=True)
class ContainerConfig:
    """The configuration part of a container's state bundle."""

    name: str
    rootfs_image_name: str
    rootfs_image_id: str
    created_time: datetime.datetime
    args: tuple[str, ...] = ()
    labels: dict[str, str] = dataclasses.field(default_factory=dict)
    mounts: tuple[SourceMount, ...] = ()
    port_mappings: tuple[SourcePortMapping, ...] = ()


@dataclasses.dataclass(frozen=True)
class ContainerSize:
    """Filesystem size figures, reported only when sizes were requested."""

    rootfs_size: int = 0
    rw_size: int = 0


@dataclasses.dataclass(frozen=True)
class StateBundle:
    """Everything the runtime reports about one container in a single query."""

    config: ContainerConfig
    state: ContainerState
    pid: int = 0
    size: ContainerSize | None = None


@dataclasses.dataclass(frozen=True)
class WirePsOpts:
    """List options as they arrive over RPC; unset fields are ``None``."""

    all: bool = False
    last: int | None = None
    latest: bool | None = None
    no_trunc: bool | None = None
    pod: bool | None = None
    size: bool | None = None
    sort: str | None = None
    sync: bool | None = None
    namespace: bool | None = None


@dataclasses.dataclass(frozen=True)
class PsOptions:
    """List options after coercion; every field has a concrete value."""

    all: bool = False
    last: int = 0
    latest: bool = False
    no_trunc: bool = False
    pod: bool = False
    size: bool = True
    sort: str = ""
    namespace: bool = True
    sync: bool = False


# --- Snapshot output ---


@dataclasses.dataclass(frozen=True)
class NamespaceDescriptor:
    """Isolation identifiers of a container's process.

    A namespace the runtime could not resolve is ``""``, never ``None``.
    """

    user: str = ""
    uts: str = ""
    pidns: str = ""
    pid: str = ""
    cgroup: str = ""
    net: str = ""
    mnt: str = ""
    ipc: str = ""


@dataclasses.dataclass(frozen=True)
class PortMapping:
    """A published port; both ports are decimal strings."""

    host_port: str
    host_ip: str
    protocol: str
    container_port: str


@dataclasses.dataclass(frozen=True)
class ContainerMount:
    destination: str
    type: str
    source: str
    options: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class ContainerSnapshot:
    """Point-in-time view of one container, built fresh per call.

    ``rootfs_size`` and ``rw_size`` are only meaningful when
    ``size_reported`` is true; otherwise they are ``0`` because the runtime
    did not measure them, not because the container is empty.
    """

    id: str
    names: str
    image: str
    image_id: str
    created_at: datetime.datetime
    running_for: datetime.timedelta
    status: ContainerState
    command: tuple[str, ...] = ()
    ports: tuple[PortMapping, ...] = ()
    labels: dict[str, str] = dataclasses.field(default_factory=dict)
    mounts: tuple[ContainerMount, ...] = ()
    running: bool = False
    namespaces: NamespaceDescriptor = dataclasses.field(default_factory=NamespaceDescriptor)
    rootfs_size: int = 0
    rw_size: int = 0
    size_reported: bool = False


@dataclasses.dataclass(frozen=True)
class PodContainerInfo:
    """Minimal per-container projection carried inside a pod snapshot."""

    id: str
    status: str
    name: str


@dataclasses.dataclass(frozen=True)
class PodSnapshot:
    """Point-in-time view of a pod and its member containers."""

    id: str
    name: str
    created_at: datetime.datetime
    status: str
    cgroup: str
    number_of_containers: str = "0"
    containers_info: tuple[PodContainerInfo, ...] = ()


@dataclasses.dataclass(frozen=True)
class PodContainerErrorData:
    """One failed container of a pod-scoped operation."""

    container_id: str
    reason: str
