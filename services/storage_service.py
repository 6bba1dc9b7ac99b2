"""
Storage Service - Per-category spreadsheet storage.

Each upload category owns one fixed file inside the uploads directory
(registered.xlsx, round1.xlsx, winners.xlsx). The file's existence is the
"current upload" pointer, so it survives restarts and a new upload simply
replaces it.
"""

import os
import shutil
import logging
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from backend.models.participant import UploadCategory
from services.exceptions import BadRequest

logger = logging.getLogger(__name__)

# Default storage directory
DEFAULT_UPLOAD_DIR = 'uploads/'
DEFAULT_ALLOWED_EXTENSIONS = ['.xlsx', '.xlsm']

CategoryLike = Union[UploadCategory, str]


class StorageService:
    """
    Framework-agnostic storage for uploaded spreadsheets.
    """

    def __init__(self, upload_dir: str = DEFAULT_UPLOAD_DIR,
                 allowed_extensions: Optional[List[str]] = None,
                 max_file_size_mb: Optional[int] = None):
        """
        Initialize storage service.

        Args:
            upload_dir: Directory holding the per-category files
            allowed_extensions: Accepted upload extensions (default: .xlsx, .xlsm)
            max_file_size_mb: Upload size limit, None for unlimited
        """
        self.upload_dir = upload_dir
        self.allowed_extensions = allowed_extensions or DEFAULT_ALLOWED_EXTENSIONS
        self.max_file_size_mb = max_file_size_mb
        self.ensure_directory_exists()

    def ensure_directory_exists(self):
        """Ensure the uploads directory exists."""
        Path(self.upload_dir).mkdir(parents=True, exist_ok=True)
        logger.debug(f"Storage directory ensured: {self.upload_dir}")

    @staticmethod
    def resolve_category(category: CategoryLike) -> UploadCategory:
        """
        Coerce a category name to UploadCategory.

        Raises:
            BadRequest: If the category is not recognized
        """
        try:
            return UploadCategory(category)
        except ValueError:
            raise BadRequest(f"Unknown upload category: {category}")

    def path_for(self, category: CategoryLike) -> Path:
        """Deterministic location of the file for a category."""
        return Path(self.upload_dir) / self.resolve_category(category).filename

    def validate_file_extension(self, filename: Optional[str]):
        """
        Reject filenames whose extension is not allowed.

        Raises:
            BadRequest: If the extension is missing or not allowed
        """
        ext = Path(filename or '').suffix.lower()

        if ext not in [e.lower() for e in self.allowed_extensions]:
            logger.warning(f"Invalid file extension: {ext!r} (allowed: {self.allowed_extensions})")
            raise BadRequest(
                f"File extension '{ext}' not allowed. "
                f"Allowed extensions: {', '.join(self.allowed_extensions)}"
            )

    def store(self, category: CategoryLike, stream: BinaryIO, filename: str) -> str:
        """
        Persist an uploaded file as the current file for a category.

        The content is written to a temporary file next to the destination
        and moved into place with os.replace, so readers see either the old
        or the new file, never a partial one.

        Args:
            category: Upload category
            stream: Readable binary stream with the file content
            filename: Original client-side filename (for extension check)

        Returns:
            Path to stored file

        Raises:
            BadRequest: On unknown category, bad extension or oversized file
        """
        dest_path = self.path_for(category)
        self.validate_file_extension(filename)
        self.ensure_directory_exists()

        fd, temp_path = tempfile.mkstemp(suffix='.part', dir=self.upload_dir)
        try:
            with os.fdopen(fd, 'wb') as tmp:
                shutil.copyfileobj(stream, tmp)

            file_size = os.path.getsize(temp_path)
            if self.max_file_size_mb is not None and file_size > self.max_file_size_mb * 1024 * 1024:
                raise BadRequest(
                    f"File size ({file_size / 1024 / 1024:.1f} MB) exceeds maximum allowed "
                    f"({self.max_file_size_mb} MB)"
                )

            os.replace(temp_path, dest_path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.info(f"Stored {filename} as {dest_path} ({file_size} bytes)")
        return str(dest_path)

    def current_location(self, category: CategoryLike) -> Optional[str]:
        """
        Get the current file for a category.

        Returns:
            Path to file if one has been uploaded, None otherwise
        """
        path = self.path_for(category)

        if path.is_file():
            return str(path)
        return None

    def delete(self, category: CategoryLike) -> bool:
        """
        Remove the current file for a category.

        Returns:
            True if file was deleted, False if there was none
        """
        path = self.path_for(category)

        if path.exists():
            path.unlink()
            logger.info(f"Deleted file: {path}")
            return True

        logger.warning(f"File not found for deletion: {path}")
        return False

    def uploaded_categories(self) -> List[UploadCategory]:
        """Categories that currently have a file."""
        return [c for c in UploadCategory if self.current_location(c) is not None]
