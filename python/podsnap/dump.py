# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Runtime collaborators backed by a YAML dump of containers and pods.

A dump looks like::

    containers:
      - id: 3f2a...
        name: web
        image: docker.io/library/nginx:latest
        image_id: sha256:4bb4...
        command: [nginx, -g, daemon off;]
        created: 2026-01-15T10:30:00Z
        state: running
        pid: 4242
        labels: {app: web}
        mounts:
          - {destination: /data, type: bind, source: /srv/data, options: [rbind]}
        ports:
          - {host_port: 8080, container_port: 80, protocol: tcp}
        size: {rootfs: 7340032, rw: 4096}
    pods:
      - id: 9c1e...
        name: webpod
        created: 2026-01-15T10:29:58Z
        cgroup_parent: machine.slice
        containers: [3f2a...]
    namespaces:
      4242: {user: "4026531837", net: "4026532290", ...}

A container in state ``removing`` still counts towards its pod's status but
refuses state queries and is never listed.  A pod naming a container the
dump does not hold cannot report a status at all.
"""

from __future__ import annotations

import dataclasses
import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml

from podsnap._helpers import parse_iso_timestamp
from podsnap.errors import ContainerQueryError, DumpError, PodNotFound
from podsnap.pods import aggregate_pod_status
from podsnap.types import (
    ContainerConfig,
    ContainerSize,
    ContainerState,
    NamespaceDescriptor,
    SourceMount,
    SourcePortMapping,
    StateBundle,
)

if TYPE_CHECKING:
    from podsnap.collaborators import ContainerHandle
    from podsnap.types import PsOptions

_NAMESPACE_FIELDS = ("user", "uts", "pidns", "cgroup", "net", "mnt", "ipc")

_SORT_KEYS: dict[str, Callable[[tuple[str, StateBundle]], Any]] = {
    "id": lambda kv: kv[0],
    "image": lambda kv: kv[1].config.rootfs_image_name,
    "names": lambda kv: kv[1].config.name,
    "status": lambda kv: str(kv[1].state),
}

# "created" is the listing order itself.
SORT_FIELDS = ("created", *_SORT_KEYS)


@dataclasses.dataclass(frozen=True)
class DumpContainer:
    """Handle to a container listed in a dump."""

    id: str


@dataclasses.dataclass(frozen=True)
class DumpPod:
    """Handle to a pod listed in a dump."""

    id: str
    name: str
    created_time: datetime.datetime
    cgroup_parent: str
    member_ids: tuple[str, ...]
    dump: RuntimeDump = dataclasses.field(repr=False, compare=False)

    def all_containers(self) -> list[DumpContainer]:
        return [DumpContainer(cid) for cid in self.member_ids]

    def status(self) -> str:
        """Aggregate the members' states.

        Raises:
            ContainerQueryError: If a member is missing from the dump.

        """
        states: list[ContainerState] = []
        for cid in self.member_ids:
            bundle = self.dump.bundles.get(cid)
            if bundle is None:
                raise ContainerQueryError(cid, f"member of pod {self.name} not found")
            states.append(bundle.state)
        return aggregate_pod_status(states)


class RuntimeDump:
    """In-memory runtime state loaded from a dump document."""

    def __init__(
        self,
        bundles: dict[str, StateBundle],
        pods: list[dict[str, Any]],
        namespaces: dict[int, NamespaceDescriptor],
    ) -> None:
        self.bundles = bundles
        self.namespaces = namespaces
        self._pods = [
            DumpPod(
                id=str(p["id"]),
                name=str(p.get("name", "")),
                created_time=_as_datetime(p.get("created")),
                cgroup_parent=str(p.get("cgroup_parent", "")),
                member_ids=tuple(str(c) for c in p.get("containers") or ()),
                dump=self,
            )
            for p in pods
        ]

    # --- collaborators ---

    def namespace_lookup(self, pid: int) -> NamespaceDescriptor:
        """Return the recorded namespaces of *pid*; unknown slots are ``""``."""
        recorded = self.namespaces.get(pid, NamespaceDescriptor())
        return dataclasses.replace(recorded, pid=str(pid))

    def query_state(self, container: ContainerHandle, options: PsOptions) -> StateBundle:
        """Return the state bundle of *container*.

        Raises:
            ContainerQueryError: If the dump has no such container, or it
                is being removed.

        """
        bundle = self.bundles.get(container.id)
        if bundle is None:
            raise ContainerQueryError(container.id, "no such container")
        if bundle.state is ContainerState.REMOVING:
            raise ContainerQueryError(container.id, "container has already been removed")
        if not options.size:
            return dataclasses.replace(bundle, size=None)
        return bundle

    # --- lookups ---

    def pods(self) -> list[DumpPod]:
        return list(self._pods)

    def pod(self, name_or_id: str) -> DumpPod:
        """Find a pod by exact name, exact ID, or unique ID prefix.

        Raises:
            PodNotFound: If nothing (or more than one ID prefix) matches.

        """
        for p in self._pods:
            if name_or_id in (p.name, p.id):
                return p
        matches = [p for p in self._pods if p.id.startswith(name_or_id)]
        if len(matches) == 1:
            return matches[0]
        raise PodNotFound(name_or_id)

    def list_containers(self, options: PsOptions) -> list[DumpContainer]:
        """Select containers the way ``ps`` does.

        Only running containers unless ``all``; ``latest`` keeps the newest
        one and ``last`` the newest N (both imply ``all``).  Containers being
        removed are never listed.  Results are newest first unless ``sort``
        names id, image, names or status.
        """
        items = [
            (cid, b) for cid, b in self.bundles.items() if b.state is not ContainerState.REMOVING
        ]
        if not (options.all or options.latest or options.last > 0):
            items = [(cid, b) for cid, b in items if b.state is ContainerState.RUNNING]

        items.sort(key=lambda kv: kv[1].config.created_time, reverse=True)
        if options.latest:
            items = items[:1]
        elif options.last > 0:
            items = items[: options.last]

        key = _SORT_KEYS.get(options.sort.lower())
        if key is not None:
            items.sort(key=key)
        return [DumpContainer(cid) for cid, _ in items]


# --- loading ---


def load_dump(path: Path | str) -> RuntimeDump:
    """Read a YAML runtime dump.

    Raises:
        DumpError: If the file cannot be read or does not describe a runtime.

    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as exc:
        raise DumpError(str(path), exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise DumpError(str(path), "not valid YAML") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DumpError(str(path), "top level must be a mapping")

    try:
        bundles = {str(c["id"]): _parse_bundle(c) for c in data.get("containers") or ()}
        namespaces = {
            int(pid): _parse_namespaces(ns) for pid, ns in (data.get("namespaces") or {}).items()
        }
        pods = list(data.get("pods") or ())
        dump = RuntimeDump(bundles, pods, namespaces)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DumpError(str(path), f"{type(exc).__name__}: {exc}") from exc
    return dump


def _as_datetime(value: object) -> datetime.datetime:
    """Accept YAML-native timestamps as well as ISO strings."""
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value
    if value is None:
        return datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
    return parse_iso_timestamp(str(value))


def _parse_bundle(raw: dict[str, Any]) -> StateBundle:
    config = ContainerConfig(
        name=str(raw.get("name", "")),
        rootfs_image_name=str(raw.get("image", "")),
        rootfs_image_id=str(raw.get("image_id", "")),
        created_time=_as_datetime(raw.get("created")),
        args=tuple(str(a) for a in raw.get("command") or ()),
        labels={str(k): str(v) for k, v in (raw.get("labels") or {}).items()},
        mounts=tuple(
            SourceMount(
                destination=str(m["destination"]),
                type=str(m.get("type", "")),
                source=str(m.get("source", "")),
                options=tuple(str(o) for o in m.get("options") or ()),
            )
            for m in raw.get("mounts") or ()
        ),
        port_mappings=tuple(
            SourcePortMapping(
                host_port=int(p["host_port"]),
                container_port=int(p["container_port"]),
                host_ip=str(p.get("host_ip", "")),
                protocol=str(p.get("protocol", "tcp")),
            )
            for p in raw.get("ports") or ()
        ),
    )
    size = raw.get("size")
    return StateBundle(
        config=config,
        state=ContainerState.parse(str(raw.get("state", ""))),
        pid=int(raw.get("pid", 0)),
        size=(
            ContainerSize(rootfs_size=int(size.get("rootfs", 0)), rw_size=int(size.get("rw", 0)))
            if isinstance(size, dict)
            else None
        ),
    )


def _parse_namespaces(raw: dict[str, Any]) -> NamespaceDescriptor:
    return NamespaceDescriptor(**{f: str(raw.get(f, "")) for f in _NAMESPACE_FIELDS})
