"""File lifecycle: uploads, listings, visibility and content reads"""

import base64
import binascii
import mimetypes
from typing import Any, List, Optional, Tuple

from files_manager.exceptions import (
    FolderHasNoContent,
    MissingField,
    NotFound,
    ValidationError,
)
from files_manager.models import (
    Entry,
    FileRecord,
    FileType,
    FolderEntry,
    ROOT_PARENT_ID,
    VALID_FILE_TYPES,
    parse_object_id,
)
from files_manager.services.auth_service import AccessControl
from files_manager.services.blob_storage import BlobStorage, variant_path
from files_manager.services.job_queue import JobQueue, ThumbnailJob
from files_manager.services.metadata_store import MetadataStore
from files_manager.utils.logger import get_logger

logger = get_logger(__name__)

# Widths the thumbnail worker derives; readable through the size parameter
THUMBNAIL_SIZES = (500, 250, 100)
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def normalize_parent_id(parent_id: Any) -> str:
    """Map the accepted spellings of the root sentinel onto ROOT_PARENT_ID"""
    if parent_id is None or parent_id == 0 or str(parent_id).strip() in ("", ROOT_PARENT_ID):
        return ROOT_PARENT_ID
    return str(parent_id).strip()


def parse_variant_size(size: Any) -> Optional[int]:
    """Thumbnail width requested, or None for the original blob"""
    if size is None:
        return None
    try:
        value = int(size)
    except (TypeError, ValueError):
        return None
    return value if value in THUMBNAIL_SIZES else None


def parse_page(page: Any) -> int:
    try:
        value = int(page)
    except (TypeError, ValueError):
        return 0
    return max(value, 0)


def decode_payload(data: str) -> bytes:
    try:
        return base64.b64decode(data)
    except (binascii.Error, ValueError, TypeError):
        raise ValidationError("Invalid data")


def guess_content_type(name: str) -> str:
    """Content type from the file extension"""
    content_type, _ = mimetypes.guess_type(name)
    return content_type or DEFAULT_CONTENT_TYPE


class FileService:
    """File lifecycle manager.

    Every operation except read_content requires a valid session token.
    Records owned by another user are reported exactly like missing ones.
    """

    def __init__(
        self,
        access: AccessControl,
        metadata: MetadataStore,
        blobs: BlobStorage,
        file_queue: JobQueue,
        page_size: int = 20,
    ):
        self.access = access
        self.metadata = metadata
        self.blobs = blobs
        self.file_queue = file_queue
        self.page_size = page_size

    async def create_entry(
        self,
        token: Optional[str],
        name: Optional[str],
        type: Optional[str],
        parent_id: Any = None,
        data: Optional[str] = None,
        is_public: bool = False,
    ) -> Entry:
        """
        Create a folder, file or image owned by the caller

        Args:
            token: Session token
            name: Display name of the entry
            type: One of folder, file, image
            parent_id: Folder id, or root when omitted
            data: Base64 payload, required unless type is folder
            is_public: Initial visibility

        Returns:
            The created entry

        Raises:
            Unauthorized, MissingField, ValidationError, ParentNotFound,
            ParentNotAFolder
        """
        user_id = await self.access.resolve_session(token)

        if not name:
            raise MissingField("name")
        if not type or type not in VALID_FILE_TYPES:
            raise MissingField("type")
        if type != FileType.FOLDER.value and not data:
            raise MissingField("data")

        payload = decode_payload(data) if type != FileType.FOLDER.value else None
        parent = await self.metadata.check_parent(normalize_parent_id(parent_id))

        record = FileRecord(
            user_id=user_id,
            name=name,
            type=type,
            is_public=bool(is_public),
            parent_id=parent,
        )

        if payload is None:
            return await self.metadata.insert_file(record)

        record.local_path = self.blobs.write_new(payload)
        try:
            entry = await self.metadata.insert_file(record)
        except Exception:
            # No record points at the blob; parent may have changed since the check
            self.blobs.remove(record.local_path)
            raise

        if entry.type == FileType.IMAGE.value:
            try:
                await self.file_queue.enqueue(ThumbnailJob(file_id=entry.id, user_id=user_id))
            except Exception as e:
                # The upload stands; its thumbnails will be missing
                logger.error(f"Failed to enqueue thumbnail job for file {entry.id}: {e}")

        return entry

    async def get_entry(self, token: Optional[str], file_id: str) -> Entry:
        user_id = await self.access.resolve_session(token)
        entry = await self.metadata.find_file(file_id, user_id=user_id)
        if entry is None:
            raise NotFound()
        return entry

    async def list_entries(
        self, token: Optional[str], parent_id: Any = None, page: Any = 0
    ) -> List[Entry]:
        """One page of the caller's entries directly under parent_id"""
        user_id = await self.access.resolve_session(token)

        parent = normalize_parent_id(parent_id)
        if parent != ROOT_PARENT_ID:
            parent = parse_object_id(parent)
            if parent is None:
                return []

        skip = parse_page(page) * self.page_size
        return await self.metadata.list_files(user_id, parent, skip=skip, limit=self.page_size)

    async def set_public(self, token: Optional[str], file_id: str, is_public: bool) -> Entry:
        user_id = await self.access.resolve_session(token)
        entry = await self.metadata.set_public(file_id, user_id, is_public)
        if entry is None:
            raise NotFound()
        return entry

    async def publish(self, token: Optional[str], file_id: str) -> Entry:
        return await self.set_public(token, file_id, True)

    async def unpublish(self, token: Optional[str], file_id: str) -> Entry:
        return await self.set_public(token, file_id, False)

    async def read_content(
        self, file_id: str, size: Any = None, token: Optional[str] = None
    ) -> Tuple[bytes, str]:
        """
        Read the bytes of a file or one of its thumbnails

        Public entries are readable by anyone; private ones only by their
        owner. A requested thumbnail that does not exist yet is NotFound,
        never the original.

        Returns:
            Tuple of (content, content_type)
        """
        entry = await self.metadata.find_file(file_id)
        if entry is None:
            raise NotFound()

        if not entry.is_public:
            user_id = await self.access.resolve_optional(token)
            if user_id != entry.user_id:
                raise NotFound()

        if isinstance(entry, FolderEntry):
            raise FolderHasNoContent()

        path = entry.local_path
        width = parse_variant_size(size)
        if width is not None:
            path = variant_path(path, width)

        if not self.blobs.exists(path):
            raise NotFound()

        return self.blobs.read(path), guess_content_type(entry.name)
