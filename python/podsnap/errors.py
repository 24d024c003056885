# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations


class PodSnapError(Exception):
    """Base exception for all podsnap errors."""


class DumpError(PodSnapError):
    """A runtime dump file is missing or malformed."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        msg = f"Invalid runtime dump {path}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class QueryError(PodSnapError):
    """A runtime collaborator could not answer a query."""


class ContainerQueryError(QueryError):
    """The state of a specific container could not be read."""

    def __init__(self, container_id: str, detail: str = "") -> None:
        self.container_id = container_id
        msg = f"Container {container_id}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class PodNotFound(QueryError):
    """No pod with the given name or ID exists."""

    def __init__(self, pod: str) -> None:
        self.pod = pod
        super().__init__(f"Pod not found: {pod}")

