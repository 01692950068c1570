"""Intake of uploaded files into the input directory."""

from logging import Logger
from pathlib import Path
from typing import Optional

from pagewright_core.exceptions import InputValidationException
from pagewright_core.logging import create_null_logger
from pagewright_core.utils import delete_if_present, unique_stamp


class UploadedFile:
    """
    An upload held on disk until the operation using it no longer needs it.

    The file is deleted exactly once, by the first call to ``release``.
    Leaving the context manager releases it as well, so every exit path
    of an operation cleans up.

    Example:
        with intake.accept(data, 'report.pdf') as upload:
            ...
    """

    def __init__(self, path: Path, original_name: Optional[str] = None, logger: Logger = None):
        self.path = path
        self.original_name = original_name or path.name
        self._released = False
        self._logger = logger or create_null_logger('pagewright.UploadedFile')

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        delete_if_present(self.path)
        self._logger.debug(f'Upload {self.path.name} released')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

    def __repr__(self) -> str:
        return f'UploadedFile({self.path.name!r}, original_name={self.original_name!r})'


class UploadIntake:
    """Write incoming upload bytes to uniquely named files in the input directory."""

    def __init__(self, upload_dir: Path | str, max_bytes: Optional[int] = None, logger: Logger = None):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self._logger = logger or create_null_logger('pagewright.UploadIntake')

    def accept(self, data: bytes, original_name: Optional[str] = None) -> UploadedFile:
        """
        Store upload bytes on disk.

        Args:
            data: Raw content of the uploaded file
            original_name: File name sent by the client, used for the extension only

        Returns:
            The UploadedFile owning the stored copy

        Raises:
            InputValidationException: If the upload exceeds the size limit
        """
        if self.max_bytes is not None and len(data) > self.max_bytes:
            raise InputValidationException(
                'File exceeds size limit',
                details={'file': original_name, 'size': len(data), 'max_bytes': self.max_bytes},
            )

        suffix = Path(original_name).suffix.lower() if original_name else ''
        if suffix and not suffix[1:].isalnum():
            suffix = ''

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / f'{unique_stamp()}{suffix}'
        with open(path, 'xb') as f:
            f.write(data)

        self._logger.debug(f'Accepted upload {original_name!r} as {path.name} ({len(data)} bytes)')
        return UploadedFile(path, original_name=original_name, logger=self._logger)

    def purge(self) -> int:
        """Delete every file left in the input directory, returning how many were removed."""
        if not self.upload_dir.is_dir():
            return 0

        removed = 0
        for entry in self.upload_dir.iterdir():
            if entry.is_file() and delete_if_present(entry):
                removed += 1

        if removed:
            self._logger.info(f'Removed {removed} orphaned upload(s) from {self.upload_dir}')
        return removed
