"""Tests for wire.py: RPC field names of rendered records."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

import pytest
from podsnap.replies import ErrorOccurred
from podsnap.snapshot import ContainerSnapshotBuilder
from podsnap.types import (
    ContainerSize,
    NamespaceDescriptor,
    PodContainerErrorData,
    PodContainerInfo,
    PodSnapshot,
    SourceMount,
    SourcePortMapping,
)
from podsnap.wire import to_wire

from .conftest import CREATED, NOW

if TYPE_CHECKING:
    from .conftest import BundleFactory


def test_container_wire_form(make_bundle: BundleFactory, namespaces: NamespaceDescriptor) -> None:
    bundle = make_bundle(
        labels={"app": "web"},
        mounts=(SourceMount("/data", "bind", "/srv/data", ("rbind",)),),
        port_mappings=(SourcePortMapping(host_port=8080, container_port=80, host_ip="127.0.0.1"),),
        size=ContainerSize(rootfs_size=100, rw_size=10),
    )
    snap = ContainerSnapshotBuilder(lambda pid: namespaces, clock=lambda: NOW).build("abc", bundle)
    wire = to_wire(snap)
    assert wire == {
        "id": "abc",
        "image": "docker.io/library/nginx:latest",
        "imageid": "sha256:4bb46517",
        "command": ["nginx", "-g", "daemon off;"],
        "createdat": "2026-01-15T10:30:00Z",
        "runningfor": "1h2m3s",
        "status": "running",
        "ports": [
            {
                "host_port": "8080",
                "host_ip": "127.0.0.1",
                "protocol": "tcp",
                "container_port": "80",
            }
        ],
        "rootfssize": 100,
        "rwsize": 10,
        "names": "web",
        "labels": {"app": "web"},
        "mounts": [
            {"destination": "/data", "type": "bind", "source": "/srv/data", "options": ["rbind"]}
        ],
        "containerrunning": True,
        "namespaces": {
            "user": "4026531837",
            "uts": "4026532288",
            "pidns": "4026532291",
            "pid": "4242",
            "cgroup": "4026531835",
            "net": "4026532293",
            "mnt": "4026532286",
            "ipc": "4026532289",
        },
    }


def test_container_wire_without_sizes_has_zeroes(make_bundle: BundleFactory) -> None:
    snap = ContainerSnapshotBuilder(lambda pid: NamespaceDescriptor(), clock=lambda: NOW).build(
        "abc", make_bundle()
    )
    wire = to_wire(snap)
    assert wire["rootfssize"] == 0
    assert wire["rwsize"] == 0


def test_empty_namespace_descriptor_fields_are_strings() -> None:
    wire = to_wire(NamespaceDescriptor())
    assert set(wire) == {"user", "uts", "pidns", "pid", "cgroup", "net", "mnt", "ipc"}
    assert all(v == "" for v in wire.values())


def test_pod_wire_form() -> None:
    pod = PodSnapshot(
        id="pod1",
        name="webpod",
        created_at=CREATED,
        status="Running",
        cgroup="machine.slice",
        number_of_containers="1",
        containers_info=(PodContainerInfo(id="c1", status="running", name="web"),),
    )
    assert to_wire(pod) == {
        "id": "pod1",
        "name": "webpod",
        "createdat": "2026-01-15T10:30:00Z",
        "cgroup": "machine.slice",
        "status": "Running",
        "numberofcontainers": "1",
        "containersinfo": [{"name": "web", "id": "c1", "status": "running"}],
    }


def test_pod_created_at_keeps_offset() -> None:
    tz = datetime.timezone(datetime.timedelta(hours=2))
    pod = PodSnapshot(
        id="p", name="n", created_at=datetime.datetime(2026, 1, 15, 12, 0, tzinfo=tz),
        status="Created", cgroup="",
    )
    assert to_wire(pod)["createdat"] == "2026-01-15T12:00:00+02:00"


def test_error_data_wire_form() -> None:
    assert to_wire(PodContainerErrorData("c1", "boom")) == {"containerid": "c1", "reason": "boom"}


def test_reply_outcome_renders_itself() -> None:
    assert to_wire(ErrorOccurred("x")) == ErrorOccurred("x").to_wire()


def test_unknown_record_rejected() -> None:
    with pytest.raises(TypeError, match="no wire form for int"):
        to_wire(42)
