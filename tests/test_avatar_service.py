"""AvatarService validation, storage and best-effort deletion."""

import io
import logging
from pathlib import Path

import pytest

from mychat.core.errors import InvalidArgumentError
from mychat.services import AvatarFile, AvatarService

MIB = 1024 * 1024


def _image(name="photo.jpg", content_type="image/jpeg", data=b"fake-image-bytes", size=None) -> AvatarFile:
    return AvatarFile(
        filename=name,
        content_type=content_type,
        size=len(data) if size is None else size,
        file=io.BytesIO(data),
    )


@pytest.mark.parametrize("name,content_type", [
    ("photo.jpg", "image/jpeg"),
    ("photo.JPEG", "image/jpg"),
    ("photo.png", "image/png"),
    ("photo.gif", "IMAGE/GIF"),
])
def test_validate_accepts_allowed_images(avatar_service, name, content_type) -> None:
    assert avatar_service.validate(_image(name, content_type))


def test_validate_accepts_exactly_five_mib(avatar_service) -> None:
    assert avatar_service.validate(_image(size=5 * MIB))


def test_validate_rejects_missing_file(avatar_service) -> None:
    assert not avatar_service.validate(None)


def test_validate_rejects_empty_file(avatar_service) -> None:
    assert not avatar_service.validate(_image(data=b""))


def test_validate_rejects_oversized_file(avatar_service) -> None:
    assert not avatar_service.validate(_image(size=5 * MIB + 1))


def test_validate_rejects_disallowed_extension(avatar_service) -> None:
    assert not avatar_service.validate(_image(name="photo.bmp", content_type="image/jpeg"))
    assert not avatar_service.validate(_image(name="photo", content_type="image/jpeg"))


def test_validate_rejects_mismatched_content_type(avatar_service) -> None:
    assert not avatar_service.validate(_image(name="photo.png", content_type="text/plain"))
    assert not avatar_service.validate(_image(name="photo.png", content_type=""))


def test_upload_writes_file_named_after_user(avatar_service, tmp_path) -> None:
    url = avatar_service.upload(_image(name="Me.JPG", data=b"\xff\xd8jpeg"), "user-123")

    assert url.startswith("/uploads/avatars/user-123_")
    assert url.endswith(".jpg")
    stored = tmp_path / "avatars" / Path(url).name
    assert stored.read_bytes() == b"\xff\xd8jpeg"


def test_upload_generates_unique_names(avatar_service) -> None:
    first = avatar_service.upload(_image(), "u1")
    second = avatar_service.upload(_image(), "u1")
    assert first != second


def test_upload_rejects_invalid_image(avatar_service, tmp_path) -> None:
    with pytest.raises(InvalidArgumentError):
        avatar_service.upload(_image(name="notes.txt", content_type="text/plain"), "u1")
    assert list((tmp_path / "avatars").iterdir()) == []


def test_delete_removes_stored_file(avatar_service) -> None:
    url = avatar_service.upload(_image(), "u1")
    path = avatar_service.get_file_path(url)
    assert path.exists()

    avatar_service.delete(url)

    assert not path.exists()


@pytest.mark.parametrize("url", ["", None, "/uploads/avatars/missing.png"])
def test_delete_ignores_empty_or_missing(avatar_service, url) -> None:
    avatar_service.delete(url)


def test_delete_never_leaves_uploads_dir(tmp_path) -> None:
    outside = tmp_path / "secret.txt"
    outside.write_text("keep me")
    service = AvatarService(uploads_dir=tmp_path / "uploads")

    service.delete("/uploads/../secret.txt")

    assert outside.exists()


def test_delete_logs_and_swallows_storage_errors(avatar_service, monkeypatch, caplog) -> None:
    url = avatar_service.upload(_image(), "u1")

    def broken_unlink(self, missing_ok=False):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(Path, "unlink", broken_unlink)
    with caplog.at_level(logging.ERROR):
        avatar_service.delete(url)

    assert "Error deleting avatar file" in caplog.text


def test_explicit_zero_size_limit_is_kept(tmp_path) -> None:
    service = AvatarService(uploads_dir=tmp_path, max_size=0)

    assert service.max_size == 0
    assert not service.validate(_image())


def test_default_size_limit_comes_from_settings(tmp_path) -> None:
    assert AvatarService(uploads_dir=tmp_path).max_size == 5 * MIB


def test_avatar_service_provider_is_shared() -> None:
    from mychat.core.deps import get_avatar_service

    assert get_avatar_service() is get_avatar_service()
