"""Document assembly and artifact lifecycle services."""

from pagewright_core.services.range_parser import parse_page_ranges
from pagewright_core.services.uploads import UploadedFile, UploadIntake
from pagewright_core.services.assembler import (
    DocumentAssembler,
    OutputDocument,
    SourceDocument,
)
from pagewright_core.services.expiry import ExpiryScheduler
from pagewright_core.services.artifact_store import ArtifactStore, NamingScheme

__all__ = [
    'parse_page_ranges',
    'UploadedFile',
    'UploadIntake',
    'DocumentAssembler',
    'OutputDocument',
    'SourceDocument',
    'ExpiryScheduler',
    'ArtifactStore',
    'NamingScheme',
]
