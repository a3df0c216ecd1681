"""Local blob storage for uploaded payloads"""

from pathlib import Path
from uuid import uuid4

from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


def variant_path(local_path: str, size: int) -> str:
    """Path of the resized copy of a blob"""
    return f"{local_path}_{size}"


class BlobStorage:
    """Write-once blobs under a single directory, named by random ids"""

    def __init__(self, folder_path: str):
        self.folder_path = Path(folder_path)

    def ensure_folder(self) -> Path:
        """Create the storage directory if absent"""
        if not self.folder_path.exists():
            self.folder_path.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created storage directory: {self.folder_path}")
        return self.folder_path

    def new_path(self) -> str:
        """Fresh collision-free path; never derived from a user filename"""
        return str(self.ensure_folder() / str(uuid4()))

    def write_new(self, data: bytes) -> str:
        """Write data to a fresh path and return the path"""
        path = self.new_path()
        self.write(path, data)
        return path

    def write(self, path: str, data: bytes):
        Path(path).write_bytes(data)
        logger.debug(f"Wrote blob {path} ({len(data)} bytes)")

    def read(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def remove(self, path: str):
        """Remove a blob that was never committed to metadata"""
        try:
            Path(path).unlink()
        except FileNotFoundError:
            pass
