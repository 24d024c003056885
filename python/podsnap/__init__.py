# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Snapshot and reply-classification layer between a container runtime and RPC."""

from __future__ import annotations

from importlib.metadata import version

from podsnap.coercion import (
    Compression,
    PullPolicy,
    coerce_list_options,
    compression_from_name,
    pull_policy_from_name,
    unwrap_bool,
    unwrap_int,
    unwrap_str,
)
from podsnap.errors import (
    ContainerQueryError,
    DumpError,
    PodNotFound,
    PodSnapError,
    QueryError,
)
from podsnap.pods import PodSnapshotBuilder, aggregate_pod_status
from podsnap.replies import ErrorOccurred, PodContainerError, ReplyDispatcher
from podsnap.snapshot import ContainerSnapshotBuilder, build_pod_container_info
from podsnap.types import (
    ContainerConfig,
    ContainerMount,
    ContainerSize,
    ContainerSnapshot,
    ContainerState,
    NamespaceDescriptor,
    PodContainerErrorData,
    PodContainerInfo,
    PodSnapshot,
    PortMapping,
    PsOptions,
    SourceMount,
    SourcePortMapping,
    StateBundle,
    WirePsOpts,
)
from podsnap.wire import to_wire

__version__ = version("podsnap")


def get_version() -> str:
    """Return the podsnap package version string."""
    return __version__


__all__ = [
    "Compression",
    "ContainerConfig",
    "ContainerMount",
    "ContainerQueryError",
    "ContainerSize",
    "ContainerSnapshot",
    "ContainerSnapshotBuilder",
    "ContainerState",
    "DumpError",
    "ErrorOccurred",
    "NamespaceDescriptor",
    "PodContainerError",
    "PodContainerErrorData",
    "PodContainerInfo",
    "PodNotFound",
    "PodSnapError",
    "PodSnapshot",
    "PodSnapshotBuilder",
    "PortMapping",
    "PsOptions",
    "PullPolicy",
    "QueryError",
    "ReplyDispatcher",
    "SourceMount",
    "SourcePortMapping",
    "StateBundle",
    "WirePsOpts",
    "__version__",
    "aggregate_pod_status",
    "build_pod_container_info",
    "coerce_list_options",
    "compression_from_name",
    "get_version",
    "pull_policy_from_name",
    "to_wire",
    "unwrap_bool",
    "unwrap_int",
    "unwrap_str",
]
