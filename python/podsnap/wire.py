# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Render snapshot records as plain dicts with the RPC field names."""

from __future__ import annotations

from functools import singledispatch

from podsnap._helpers import format_duration, format_rfc3339
from podsnap.types import (
    ContainerMount,
    ContainerSnapshot,
    NamespaceDescriptor,
    PodContainerErrorData,
    PodContainerInfo,
    PodSnapshot,
    PortMapping,
)


@singledispatch
def to_wire(record: object) -> dict[str, object]:
    """Return the wire form of *record*.

    Reply outcomes render themselves via their own ``to_wire()``.
    """
    render = getattr(record, "to_wire", None)
    if render is None:
        msg = f"no wire form for {type(record).__name__}"
        raise TypeError(msg)
    return render()  # type: ignore[no-any-return]


@to_wire.register
def _(record: PortMapping) -> dict[str, object]:
    return {
        "host_port": record.host_port,
        "host_ip": record.host_ip,
        "protocol": record.protocol,
        "container_port": record.container_port,
    }


@to_wire.register
def _(record: ContainerMount) -> dict[str, object]:
    return {
        "destination": record.destination,
        "type": record.type,
        "source": record.source,
        "options": list(record.options),
    }


@to_wire.register
def _(record: NamespaceDescriptor) -> dict[str, object]:
    return {
        "user": record.user,
        "uts": record.uts,
        "pidns": record.pidns,
        "pid": record.pid,
        "cgroup": record.cgroup,
        "net": record.net,
        "mnt": record.mnt,
        "ipc": record.ipc,
    }


@to_wire.register
def _(record: ContainerSnapshot) -> dict[str, object]:
    return {
        "id": record.id,
        "image": record.image,
        "imageid": record.image_id,
        "command": list(record.command),
        "createdat": format_rfc3339(record.created_at),
        "runningfor": format_duration(record.running_for),
        "status": str(record.status),
        "ports": [to_wire(p) for p in record.ports],
        "rootfssize": record.rootfs_size,
        "rwsize": record.rw_size,
        "names": record.names,
        "labels": dict(record.labels),
        "mounts": [to_wire(m) for m in record.mounts],
        "containerrunning": record.running,
        "namespaces": to_wire(record.namespaces),
    }


@to_wire.register
def _(record: PodContainerInfo) -> dict[str, object]:
    return {"name": record.name, "id": record.id, "status": record.status}


@to_wire.register
def _(record: PodSnapshot) -> dict[str, object]:
    return {
        "id": record.id,
        "name": record.name,
        "createdat": format_rfc3339(record.created_at),
        "cgroup": record.cgroup,
        "status": record.status,
        "numberofcontainers": record.number_of_containers,
        "containersinfo": [to_wire(c) for c in record.containers_info],
    }


@to_wire.register
def _(record: PodContainerErrorData) -> dict[str, object]:
    return {"containerid": record.container_id, "reason": record.reason}
