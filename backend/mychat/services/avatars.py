"""Avatar image upload with organized storage under the uploads directory."""
import os
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from fastapi import UploadFile

from mychat.core.config import settings
from mychat.core.errors import InvalidArgumentError
from mychat.utils.logger import get_logger

logger = get_logger(__name__)

AVATARS_FOLDER = "avatars"
PUBLIC_PREFIX = "/uploads"
ALLOWED_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif'}
ALLOWED_CONTENT_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/gif'}


@dataclass
class AvatarFile:
    """An uploaded image as seen by the avatar service."""
    filename: str
    content_type: str
    size: int
    file: BinaryIO

    @classmethod
    def from_upload(cls, upload: UploadFile) -> "AvatarFile":
        stream = upload.file
        size = upload.size
        if size is None:
            stream.seek(0, os.SEEK_END)
            size = stream.tell()
            stream.seek(0)
        return cls(
            filename=upload.filename or "",
            content_type=upload.content_type or "",
            size=size,
            file=stream,
        )


class AvatarService:
    def __init__(self, uploads_dir: Optional[Path] = None, max_size: Optional[int] = None):
        self.uploads_dir = Path(uploads_dir or settings.UPLOADS_DIR)
        self.avatars_dir = self.uploads_dir / AVATARS_FOLDER
        self.max_size = settings.MAX_AVATAR_SIZE if max_size is None else max_size
        self.avatars_dir.mkdir(parents=True, exist_ok=True)

    def validate(self, file: Optional[AvatarFile]) -> bool:
        """
        Check that the file looks like an acceptable avatar image.

        Requires a non-empty file no larger than the size limit, with an
        allowed extension and an allowed declared content type.
        """
        if file is None or file.size <= 0:
            return False

        if file.size > self.max_size:
            return False

        ext = Path(file.filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            return False

        if (file.content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
            return False

        return True

    def upload(self, file: Optional[AvatarFile], user_id: str) -> str:
        """
        Save a validated avatar as {user_id}_{token}{ext}.

        Returns:
            Public URL path of the stored file, e.g. /uploads/avatars/<name>.jpg
        """
        if not self.validate(file):
            raise InvalidArgumentError("Invalid image file")

        ext = Path(file.filename).suffix.lower()
        unique_filename = f"{user_id}_{uuid.uuid4().hex}{ext}"
        file_path = self.avatars_dir / unique_filename

        with file_path.open("wb") as buffer:
            shutil.copyfileobj(file.file, buffer)

        url = f"{PUBLIC_PREFIX}/{AVATARS_FOLDER}/{unique_filename}"
        logger.info("Avatar uploaded for user %s: %s", user_id, url)
        return url

    def delete(self, avatar_url: Optional[str]) -> None:
        """
        Best-effort removal of a stored avatar. Missing files and empty paths
        are ignored; filesystem errors are logged, never raised.
        """
        if not avatar_url:
            return

        try:
            file_path = self.get_file_path(avatar_url)
            if file_path is not None and file_path.is_file():
                file_path.unlink()
                logger.info("Avatar deleted: %s", avatar_url)
        except Exception:
            logger.exception("Error deleting avatar file: %s", avatar_url)

    def get_file_path(self, avatar_url: str) -> Optional[Path]:
        """
        Map a public URL like '/uploads/avatars/x.jpg' to its location on disk.
        Returns None for paths that would escape the uploads directory.
        """
        relative_url = avatar_url.lstrip('/')
        prefix = PUBLIC_PREFIX.lstrip('/') + '/'
        if relative_url.startswith(prefix):
            relative_url = relative_url[len(prefix):]

        root = self.uploads_dir.resolve()
        file_path = (root / relative_url).resolve()
        if root != file_path and root not in file_path.parents:
            return None
        return file_path
