# backend/utils/storage.py
import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from config import settings

logger = logging.getLogger(__name__)


class LocalObjectStore:
    """Object store backed by a directory that is also served under /uploads."""

    def __init__(self, root, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        root = self.root.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            raise ValueError(f"Invalid object key: {key!r}")
        return path

    def save(self, key: str, fileobj: BinaryIO) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as buffer:
            shutil.copyfileobj(fileobj, buffer)

    def exists(self, key: str) -> bool:
        try:
            return self._path(key).is_file()
        except ValueError:
            return False

    def delete(self, key: str) -> None:
        # Raises OSError on I/O failure; a missing object counts as deleted
        self._path(key).unlink(missing_ok=True)

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"


default_store = LocalObjectStore(
    settings.UPLOAD_DIR,
    f"{settings.PUBLIC_URL.rstrip('/')}/uploads",
)


def get_storage() -> LocalObjectStore:
    return default_store
