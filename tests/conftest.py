"""Shared fixtures for podsnap tests."""

from __future__ import annotations

import dataclasses
import datetime
from typing import TYPE_CHECKING, Callable

import pytest
from podsnap.types import (
    ContainerConfig,
    ContainerSize,
    ContainerState,
    NamespaceDescriptor,
    StateBundle,
)

if TYPE_CHECKING:
    from pathlib import Path

    from podsnap.types import PsOptions

CREATED = datetime.datetime(2026, 1, 15, 10, 30, 0, tzinfo=datetime.timezone.utc)
NOW = datetime.datetime(2026, 1, 15, 11, 32, 3, tzinfo=datetime.timezone.utc)


@dataclasses.dataclass(frozen=True)
class FakeContainer:
    id: str


@dataclasses.dataclass
class FakePod:
    """Pod handle whose collaborator calls can be made to fail."""

    id: str = "pod0001"
    name: str = "webpod"
    created_time: datetime.datetime = CREATED
    cgroup_parent: str = "machine.slice"
    member_ids: list[str] = dataclasses.field(default_factory=list)
    status_value: str = "Running"
    status_error: Exception | None = None
    enumerate_error: Exception | None = None

    def all_containers(self) -> list[FakeContainer]:
        if self.enumerate_error is not None:
            raise self.enumerate_error
        return [FakeContainer(cid) for cid in self.member_ids]

    def status(self) -> str:
        if self.status_error is not None:
            raise self.status_error
        return self.status_value


class FakeStateQuery:
    """Answers per-container queries from a dict; raises the mapped errors."""

    def __init__(
        self,
        bundles: dict[str, StateBundle],
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.bundles = bundles
        self.errors = errors or {}
        self.calls: list[str] = []

    def __call__(self, container: FakeContainer, options: PsOptions) -> StateBundle:
        self.calls.append(container.id)
        if container.id in self.errors:
            raise self.errors[container.id]
        return self.bundles[container.id]


BundleFactory = Callable[..., StateBundle]


@pytest.fixture
def make_bundle() -> BundleFactory:
    """Return a factory for state bundles with sensible defaults."""

    def _make(
        name: str = "web",
        state: ContainerState = ContainerState.RUNNING,
        pid: int = 4242,
        size: ContainerSize | None = None,
        **config_overrides: object,
    ) -> StateBundle:
        fields: dict[str, object] = {
            "name": name,
            "rootfs_image_name": "docker.io/library/nginx:latest",
            "rootfs_image_id": "sha256:4bb46517",
            "created_time": CREATED,
            "args": ("nginx", "-g", "daemon off;"),
        }
        fields.update(config_overrides)
        config = ContainerConfig(**fields)  # type: ignore[arg-type]
        return StateBundle(config=config, state=state, pid=pid, size=size)

    return _make


@pytest.fixture
def namespaces() -> NamespaceDescriptor:
    return NamespaceDescriptor(
        user="4026531837",
        uts="4026532288",
        pidns="4026532291",
        pid="4242",
        cgroup="4026531835",
        net="4026532293",
        mnt="4026532286",
        ipc="4026532289",
    )


DUMP_YAML = """\
containers:
  - id: aaaa1111bbbb2222cccc
    name: web
    image: docker.io/library/nginx:latest
    image_id: sha256:4bb46517
    command: [nginx, -g, "daemon off;"]
    created: 2026-01-15T10:30:00Z
    state: running
    pid: 4242
    labels: {app: web}
    mounts:
      - {destination: /data, type: bind, source: /srv/data, options: [rbind, rw]}
    ports:
      - {host_port: 8080, container_port: 80, host_ip: 127.0.0.1, protocol: tcp}
    size: {rootfs: 7340032, rw: 4096}
  - id: dddd3333eeee4444ffff
    name: db
    image: docker.io/library/postgres:16
    image_id: sha256:9d1c
    command: [postgres]
    created: "2026-01-15T10:31:00Z"
    state: exited
    pid: 0
  - id: 9999888877776666
    name: cache
    image: docker.io/library/redis:7
    created: 2026-01-15T10:29:00Z
    state: Running
    pid: 5151
  - id: eeee5555ffff6666
    name: old-cache
    image: docker.io/library/redis:6
    created: 2026-01-15T10:20:00Z
    state: removing
    pid: 0
pods:
  - id: pod0001aaaa
    name: webpod
    created: 2026-01-15T10:29:58Z
    cgroup_parent: machine.slice
    containers: [aaaa1111bbbb2222cccc, dddd3333eeee4444ffff]
  - id: pod0002bbbb
    name: brokenpod
    created: 2026-01-15T10:28:00Z
    cgroup_parent: machine.slice
    containers: [9999888877776666, eeee5555ffff6666, dddd3333eeee4444ffff]
namespaces:
  4242:
    user: "4026531837"
    uts: "4026532288"
    pidns: "4026532291"
    cgroup: "4026531835"
    net: "4026532293"
    mnt: "4026532286"
    ipc: "4026532289"
"""


@pytest.fixture
def dump_path(tmp_path: Path) -> Path:
    """Write the sample runtime dump and return its path."""
    path = tmp_path / "runtime.yaml"
    path.write_text(DUMP_YAML)
    return path
