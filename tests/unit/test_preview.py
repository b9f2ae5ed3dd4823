"""Tests for preview handles."""

from devtools_sdk.batch import PreviewHandle


def test_create_writes_temp_file():
    handle = PreviewHandle.create(b"pixels", "photo.png")
    try:
        assert handle.path.exists()
        assert handle.path.suffix == ".png"
        assert handle.path.read_bytes() == b"pixels"
        assert not handle.released
    finally:
        handle.release()


def test_release_removes_file_and_is_idempotent():
    handle = PreviewHandle.create(b"pixels", "photo.jpg")
    path = handle.path

    handle.release()
    handle.release()

    assert handle.released
    assert handle.path is None
    assert not path.exists()


def test_release_tolerates_missing_file():
    handle = PreviewHandle.create(b"pixels")
    handle.path.unlink()

    handle.release()

    assert handle.released
