"""Operation boundary for merge, split and download requests."""

from contextlib import ExitStack
from datetime import timedelta
from logging import Logger
from pathlib import Path
from typing import List, Optional, Sequence

from pagewright_core.exceptions import InputValidationException, ProcessingException
from pagewright_core.logging import create_config_logger, create_null_logger
from pagewright_core.models import Artifact, InvalidRangeExpression
from pagewright_core.models.config import PagewrightConfig
from pagewright_core.services import (
    ArtifactStore,
    DocumentAssembler,
    ExpiryScheduler,
    NamingScheme,
    SourceDocument,
    UploadedFile,
    UploadIntake,
    parse_page_ranges,
)


class Workbench:
    """Run document operations from accepted uploads to downloadable artifacts.

    Every upload handed to an operation is released before the operation
    returns, whether it succeeds or fails. Validation problems surface as
    `InputValidationException`; anything else is logged and raised again as
    a `ProcessingException` with a generic message, after removing the
    artifacts the failing operation had already written.

    Example
    -------
    >>> workbench = Workbench.from_config(PagewrightConfig())
    >>> artifact = workbench.merge([intake.accept(a, 'a.pdf'), intake.accept(b, 'b.pdf')])
    >>> workbench.resolve(artifact.name)
    """

    def __init__(
        self,
        intake: UploadIntake,
        store: ArtifactStore,
        scheduler: ExpiryScheduler,
        assembler: Optional[DocumentAssembler] = None,
        min_merge_files: int = 2,
        max_merge_files: int = 10,
        logger: Logger = None,
    ):
        self.intake = intake
        self.store = store
        self.scheduler = scheduler
        self.assembler = assembler or DocumentAssembler(logger=logger)
        self.min_merge_files = min_merge_files
        self.max_merge_files = max_merge_files
        self._logger = logger or create_null_logger('pagewright.Workbench')

    @classmethod
    def from_config(cls, config: PagewrightConfig, logger: Logger = None, scheduler: ExpiryScheduler = None) -> 'Workbench':
        """Build a workbench from configuration values.

        Parameters
        ----------
        config : PagewrightConfig
            Directories, retention and limits
        logger : Logger, optional
            Logger shared by all components, by default the "pagewright" logger
            configured from the logging settings
        scheduler : ExpiryScheduler, optional
            The scheduler deleting expired artifacts, by default a new one (not started)
        """
        logger = logger or create_config_logger(config)
        scheduler = scheduler or ExpiryScheduler(logger=logger)
        return cls(
            intake=UploadIntake(config.upload_dir, max_bytes=config.max_upload_bytes, logger=logger),
            store=ArtifactStore(
                config.output_dir,
                scheduler=scheduler,
                retention=timedelta(seconds=config.retention_seconds),
                logger=logger,
            ),
            scheduler=scheduler,
            assembler=DocumentAssembler(logger=logger),
            min_merge_files=config.min_merge_files,
            max_merge_files=config.max_merge_files,
            logger=logger,
        )

    def merge(self, uploads: Sequence[UploadedFile]) -> Artifact:
        """Merge uploads, in the given order, into one PDF artifact.

        Raises
        ------
        InputValidationException
            If the number of uploads is outside the accepted bounds
        ProcessingException
            If a document cannot be read or the artifact cannot be written
        """
        with ExitStack() as stack:
            for upload in uploads:
                stack.callback(upload.release)

            if len(uploads) < self.min_merge_files:
                self._logger.warning(f'Merge rejected: {len(uploads)} file(s) received')
                raise InputValidationException(
                    f'Please upload at least {self.min_merge_files} PDF files',
                    details={'received': len(uploads)},
                )
            if len(uploads) > self.max_merge_files:
                self._logger.warning(f'Merge rejected: {len(uploads)} file(s) received')
                raise InputValidationException(
                    f'Please upload at most {self.max_merge_files} PDF files',
                    details={'received': len(uploads)},
                )

            try:
                sources = [SourceDocument.from_upload(upload) for upload in uploads]
                with self.assembler.merge(sources, min_count=self.min_merge_files) as merged:
                    return self.store.persist(merged, NamingScheme.merged())
            except InputValidationException:
                raise
            except Exception as e:
                self._logger.exception('Merge error')
                raise ProcessingException('Error merging PDFs') from e

    def split(self, upload: Optional[UploadedFile], pages: Optional[str]) -> Artifact:
        """Split an upload by page ranges.

        Parameters
        ----------
        upload : UploadedFile, optional
            The document to split. None is reported as a validation error.
        pages : str, optional
            The range expression, e.g. ``"1,3-4"``

        Returns
        -------
        Artifact
            The split document when the expression has a single group,
            otherwise a zip bundle of one document per group

        Raises
        ------
        InputValidationException
            If the upload is missing or the expression is invalid
        ProcessingException
            If the document cannot be read or the artifacts cannot be written
        """
        if upload is None:
            raise InputValidationException('Please upload a PDF file')

        persisted: List[Artifact] = []
        with upload:
            try:
                source = SourceDocument.from_upload(upload)
                with source:
                    spec = parse_page_ranges(pages, source.page_count)
                    if isinstance(spec, InvalidRangeExpression):
                        self._logger.warning(f'Split rejected: {spec.reason}')
                        raise InputValidationException(
                            'Invalid page range',
                            details={'pages': pages, 'reason': spec.reason},
                        )
                    outputs = self.assembler.split(source, spec)

                try:
                    for group, output in zip(spec.groups, outputs):
                        persisted.append(self.store.persist(output, NamingScheme.split(group.label)))
                finally:
                    for output in outputs:
                        output.close()

                if len(persisted) == 1:
                    return persisted[0]
                return self.store.bundle(persisted)
            except InputValidationException:
                raise
            except Exception as e:
                self._logger.exception('Split error')
                self.store.discard(persisted)
                raise ProcessingException('Error splitting PDF') from e

    def resolve(self, name: str) -> Optional[Path]:
        """Return the path of a live artifact, None when it does not exist (anymore)."""
        return self.store.resolve(name)
