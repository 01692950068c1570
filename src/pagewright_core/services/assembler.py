"""Page level document assembly using PyMuPDF."""

from itertools import groupby
from logging import Logger
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import pymupdf

from pagewright_core.exceptions import DocumentLoadException, InputValidationException
from pagewright_core.logging import create_null_logger
from pagewright_core.models import RangeSpecification
from pagewright_core.services.uploads import UploadedFile


def _contiguous_runs(indices: Iterable[int]) -> List[Tuple[int, int]]:
    """Collapse indices into (from_page, to_page) runs, e.g. [0, 1, 2, 5] -> [(0, 2), (5, 5)]."""
    runs = []
    for _, run in groupby(enumerate(indices), key=lambda item: item[1] - item[0]):
        run = [index for _, index in run]
        runs.append((run[0], run[-1]))
    return runs


class SourceDocument:
    """
    A PDF the assembler copies pages from.

    The document is opened lazily when entering the context manager and
    closed on exit. When the source comes from an upload, closing it also
    releases the upload, so the input file lives no longer than the pages
    are needed. Entering an already open source is a no-op and closing is
    idempotent, which lets a caller inspect the page count before handing
    the source over to the assembler.

    Example:
        with SourceDocument.from_upload(upload) as source:
            spec = parse_page_ranges(pages, source.page_count)
    """

    def __init__(self, pdf_path: Path, upload: Optional[UploadedFile] = None, name: Optional[str] = None):
        self.pdf_path = Path(pdf_path)
        self.name = name or self.pdf_path.name
        self._upload = upload
        self._doc = None
        self._closed = False

    @classmethod
    def from_upload(cls, upload: UploadedFile) -> 'SourceDocument':
        return cls(upload.path, upload=upload, name=upload.original_name)

    def open(self) -> 'SourceDocument':
        """
        Open the underlying PDF.

        Raises:
            DocumentLoadException: If the file is not a readable, unencrypted PDF with pages
            RuntimeError: If the source was already closed
        """
        if self._doc is not None:
            return self
        if self._closed:
            raise RuntimeError(f'SourceDocument {self.name} is closed')

        try:
            doc = pymupdf.open(str(self.pdf_path), filetype='pdf')
        except Exception as e:
            raise DocumentLoadException(
                'Unable to read PDF document', details={'file': self.name, 'error': str(e)}
            ) from e

        if doc.needs_pass or doc.page_count == 0:
            reason = 'encrypted' if doc.needs_pass else 'no pages'
            doc.close()
            raise DocumentLoadException(
                'Unable to read PDF document', details={'file': self.name, 'error': reason}
            )

        self._doc = doc
        return self

    def close(self) -> None:
        if self._doc is not None:
            self._doc.close()
            self._doc = None
        self._closed = True
        if self._upload is not None:
            self._upload.release()

    def __enter__(self):
        try:
            return self.open()
        except Exception:
            self.close()
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def is_open(self) -> bool:
        return self._doc is not None

    @property
    def page_count(self) -> int:
        return self._require_open().page_count

    def _require_open(self) -> pymupdf.Document:
        if self._doc is None:
            raise RuntimeError('SourceDocument must be used within a context manager')
        return self._doc


class OutputDocument:
    """A new document accumulating copied pages in the order they are appended."""

    def __init__(self):
        self._doc = pymupdf.open()

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def append(self, source: SourceDocument, indices: Optional[Sequence[int]] = None) -> None:
        """
        Append pages of an open source document.

        Args:
            source: The source to copy from
            indices: Zero-based page indices in the order to append them. None means all pages.
        """
        src = source._require_open()

        if indices is None:
            self._doc.insert_pdf(src)
            return

        for from_page, to_page in _contiguous_runs(indices):
            self._doc.insert_pdf(src, from_page=from_page, to_page=to_page)

    def to_bytes(self) -> bytes:
        return self._doc.tobytes(garbage=3, deflate=True, no_new_id=True)

    def close(self) -> None:
        self._doc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class DocumentAssembler:
    """Merge and split documents by copying page sequences."""

    def __init__(self, logger: Logger = None):
        self._logger = logger or create_null_logger('pagewright.DocumentAssembler')

    def merge(self, sources: Sequence[SourceDocument], min_count: int = 2) -> OutputDocument:
        """
        Concatenate all pages of the sources, in the given order.

        Sources are opened one at a time and each is closed, releasing its
        upload, before the next one is opened.

        Args:
            sources: The documents to merge, in upload order
            min_count: Minimum number of sources accepted

        Returns:
            The merged document

        Raises:
            InputValidationException: If fewer than ``min_count`` sources are given
            DocumentLoadException: If a source cannot be read
        """
        if len(sources) < min_count:
            raise InputValidationException(
                f'Please upload at least {min_count} PDF files',
                details={'received': len(sources)},
            )

        output = OutputDocument()
        try:
            for source in sources:
                with source:
                    output.append(source)
                    self._logger.debug(f'Appended {source.page_count} page(s) from {source.name}')
        except Exception:
            output.close()
            for source in sources:
                source.close()
            raise

        self._logger.info(f'Merged {len(sources)} documents into {output.page_count} pages')
        return output

    def split(self, source: SourceDocument, spec: RangeSpecification) -> List[OutputDocument]:
        """
        Copy each group of the range specification into its own document.

        Args:
            source: The document to split
            spec: Page groups validated against the source's page count

        Returns:
            One document per group, in group order

        Raises:
            InputValidationException: If the specification has no groups
            DocumentLoadException: If the source cannot be read
        """
        if spec is None or not spec.groups:
            source.close()
            raise InputValidationException('Invalid page range')

        outputs: List[OutputDocument] = []
        with source:
            if max(group.last for group in spec.groups) >= source.page_count:
                raise InputValidationException(
                    'Invalid page range',
                    details={'pages': spec.expression, 'page_count': source.page_count},
                )
            try:
                for group in spec.groups:
                    output = OutputDocument()
                    outputs.append(output)
                    output.append(source, group.indices)
            except Exception:
                for output in outputs:
                    output.close()
                raise

        self._logger.info(f'Split {source.name} into {len(outputs)} document(s) using "{spec.expression}"')
        return outputs
