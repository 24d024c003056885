"""Smoke test: verify the package is importable and versioned."""

from __future__ import annotations


def test_import_podsnap() -> None:
    import podsnap

    assert hasattr(podsnap, "__name__")


def test_version_attribute() -> None:
    import podsnap

    assert isinstance(podsnap.__version__, str)
    assert podsnap.__version__ == "0.3.0"


def test_get_version_function() -> None:
    from podsnap import get_version

    assert get_version() == "0.3.0"


def test_import_builders() -> None:
    from podsnap import ContainerSnapshotBuilder, PodSnapshotBuilder, ReplyDispatcher

    assert callable(ContainerSnapshotBuilder)
    assert callable(PodSnapshotBuilder)
    assert callable(ReplyDispatcher)


def test_import_coercion() -> None:
    from podsnap import coerce_list_options, compression_from_name, pull_policy_from_name

    assert callable(coerce_list_options)
    assert callable(compression_from_name)
    assert callable(pull_policy_from_name)
