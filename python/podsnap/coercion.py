# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Resolve optional wire values and enum names to concrete defaults.

Nothing here raises.  Unrecognized enum names fall back to the table's
default entry, so a caller that sent garbage is indistinguishable from one
that asked for the default.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from podsnap.types import PsOptions

if TYPE_CHECKING:
    from podsnap.types import WirePsOpts


class Compression(enum.Enum):
    UNCOMPRESSED = "uncompressed"
    BZIP2 = "bzip2"
    GZIP = "gzip"
    XZ = "xz"


class PullPolicy(enum.Enum):
    PULL_IF_MISSING = "pull-if-missing"
    PULL_ALWAYS = "pull-always"
    PULL_NEVER = "pull-never"


# Keys are upper-cased names; None is the default entry.
_COMPRESSION_BY_NAME: dict[str | None, Compression] = {
    "BZIP2": Compression.BZIP2,
    "GZIP": Compression.GZIP,
    "XZ": Compression.XZ,
    None: Compression.UNCOMPRESSED,
}

# Keys are normalized names (see _normalize).
_PULL_POLICY_BY_NAME: dict[str | None, PullPolicy] = {
    "PULLIFMISSING": PullPolicy.PULL_IF_MISSING,
    "PULLALWAYS": PullPolicy.PULL_ALWAYS,
    "PULLNEVER": PullPolicy.PULL_NEVER,
    None: PullPolicy.PULL_IF_MISSING,
}


def unwrap_bool(value: bool | None) -> bool:  # noqa: FBT001
    """Return *value*, or ``False`` when it is unset."""
    return False if value is None else value


def unwrap_str(value: str | None) -> str:
    """Return *value*, or ``""`` when it is unset."""
    return "" if value is None else value


def unwrap_int(value: int | None) -> int:
    """Return *value* as an int, or ``0`` when it is unset."""
    return 0 if value is None else int(value)


def _normalize(name: str | None) -> str:
    """Upper-case *name* and drop ``-`` and ``_`` separators."""
    return unwrap_str(name).upper().replace("-", "").replace("_", "")


def compression_from_name(name: str | None) -> Compression:
    """Map ``bzip2``/``gzip``/``xz`` (any case) to a :class:`Compression`.

    Only the case is folded: separators or padding make a name unrecognized.
    """
    key = unwrap_str(name).upper()
    return _COMPRESSION_BY_NAME.get(key, _COMPRESSION_BY_NAME[None])


def pull_policy_from_name(name: str | None) -> PullPolicy:
    """Map a pull policy name (any case, separators optional) to a :class:`PullPolicy`."""
    key = _normalize(name)
    return _PULL_POLICY_BY_NAME.get(key, _PULL_POLICY_BY_NAME[None])


def coerce_list_options(wire: WirePsOpts) -> PsOptions:
    """Convert RPC list options to :class:`PsOptions`.

    ``size`` and ``namespace`` are always on: every listed container carries
    its size figures and namespace descriptor, whatever the caller sent.
    """
    return PsOptions(
        all=wire.all,
        last=unwrap_int(wire.last),
        latest=unwrap_bool(wire.latest),
        no_trunc=unwrap_bool(wire.no_trunc),
        pod=unwrap_bool(wire.pod),
        size=True,
        sort=unwrap_str(wire.sort),
        namespace=True,
        sync=unwrap_bool(wire.sync),
    )
