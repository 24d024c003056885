"""Tests for podsnap data types."""

from __future__ import annotations

import dataclasses

import podsnap
import pytest
from podsnap.types import (
    ContainerState,
    NamespaceDescriptor,
    PodContainerErrorData,
    PodSnapshot,
    PsOptions,
    WirePsOpts,
)

from .conftest import CREATED

# --- ContainerState ---


def test_container_state_str_is_value() -> None:
    assert str(ContainerState.RUNNING) == "running"


@pytest.mark.parametrize("name", ["running", "RUNNING", " Running "])
def test_container_state_parse_any_case(name: str) -> None:
    assert ContainerState.parse(name) is ContainerState.RUNNING


def test_container_state_parse_unknown() -> None:
    assert ContainerState.parse("zombie") is ContainerState.UNKNOWN


# --- NamespaceDescriptor ---


def test_namespace_defaults_are_empty_strings() -> None:
    ns = NamespaceDescriptor()
    assert all(getattr(ns, f.name) == "" for f in dataclasses.fields(ns))
    assert len(dataclasses.fields(ns)) == 8


# --- WirePsOpts / PsOptions ---


def test_wire_ps_opts_unset_fields_are_none() -> None:
    opts = WirePsOpts()
    assert opts.all is False
    assert opts.last is None
    assert opts.latest is None
    assert opts.sort is None
    assert opts.size is None
    assert opts.namespace is None


def test_ps_options_defaults() -> None:
    opts = PsOptions()
    assert opts.size is True
    assert opts.namespace is True
    assert opts.last == 0
    assert opts.sort == ""


# --- PodSnapshot ---


def test_pod_snapshot_defaults() -> None:
    pod = PodSnapshot(id="p", name="n", created_at=CREATED, status="Created", cgroup="")
    assert pod.number_of_containers == "0"
    assert pod.containers_info == ()


def test_pod_snapshot_is_frozen() -> None:
    pod = PodSnapshot(id="p", name="n", created_at=CREATED, status="Created", cgroup="")
    with pytest.raises(dataclasses.FrozenInstanceError):
        pod.status = "Running"  # type: ignore[misc]


def test_error_data_is_frozen() -> None:
    data = PodContainerErrorData("c1", "boom")
    with pytest.raises(dataclasses.FrozenInstanceError):
        data.reason = "other"  # type: ignore[misc]


# --- exports ---


def test_types_exported_from_package() -> None:
    assert podsnap.ContainerState is ContainerState
    assert podsnap.PodSnapshot is PodSnapshot
    assert podsnap.WirePsOpts is WirePsOpts
