"""Persistence, packaging and expiry of generated artifacts."""

import re
import time
import zipfile
from datetime import datetime, timedelta, timezone
from logging import Logger
from pathlib import Path
from typing import List, Optional, Sequence

from pagewright_core.logging import create_null_logger
from pagewright_core.models import Artifact, ArtifactKind
from pagewright_core.services.assembler import OutputDocument
from pagewright_core.services.expiry import ExpiryScheduler
from pagewright_core.utils import delete_if_present, unique_stamp

DEFAULT_RETENTION = timedelta(hours=1)

SAFE_NAME_RE = re.compile(r'^[A-Za-z0-9][A-Za-z0-9._-]*$')


class NamingScheme:
    """
    Build artifact file names as ``<prefix>[_<label>]_<stamp><suffix>``.

    Example:
        NamingScheme.split(group.label).render(1700000000000)
        # 'split_3-4_1700000000000.pdf'
    """

    def __init__(self, prefix: str, kind: ArtifactKind, label: Optional[str] = None, suffix: str = '.pdf'):
        self.prefix = prefix
        self.kind = kind
        self.label = label
        self.suffix = suffix

    @classmethod
    def merged(cls) -> 'NamingScheme':
        return cls('merged', 'merged')

    @classmethod
    def split(cls, label: str) -> 'NamingScheme':
        return cls('split', 'split', label=label)

    @classmethod
    def bundle(cls) -> 'NamingScheme':
        return cls('split_results', 'bundle', suffix='.zip')

    def render(self, stamp: int) -> str:
        parts = [self.prefix]
        if self.label:
            parts.append(self.label)
        parts.append(str(stamp))
        return '_'.join(parts) + self.suffix


class ArtifactStore:
    """
    Own the output directory: write artifacts, schedule their deletion and
    look them up for download.

    Every artifact is deleted ``retention`` after it was created. The
    deadline is fixed when the artifact is written; downloads never extend it.
    """

    def __init__(
        self,
        output_dir: Path | str,
        scheduler: ExpiryScheduler,
        retention: timedelta = DEFAULT_RETENTION,
        logger: Logger = None,
    ):
        self.output_dir = Path(output_dir)
        self.retention = retention
        self._scheduler = scheduler
        self._logger = logger or create_null_logger('pagewright.ArtifactStore')

    def persist(self, document: OutputDocument, naming: NamingScheme) -> Artifact:
        """
        Serialize a document into a new artifact.

        Args:
            document: The assembled document, serialized before anything is written
            naming: How to name the artifact file

        Returns:
            The persisted artifact
        """
        data = document.to_bytes()
        return self._write(naming, lambda path: self._write_exclusive(path, data))

    def bundle(self, artifacts: Sequence[Artifact]) -> Artifact:
        """
        Pack artifacts into a zip archive, itself an artifact with the same retention.

        Members are stored under their artifact names, in the given order,
        and stay on disk as standalone artifacts with their own deadlines.
        """
        if not artifacts:
            raise ValueError('Cannot bundle an empty list of artifacts')

        def write_archive(path: Path) -> None:
            with zipfile.ZipFile(path, 'x', zipfile.ZIP_DEFLATED) as archive:
                for artifact in artifacts:
                    archive.write(artifact.path, artifact.name)

        return self._write(NamingScheme.bundle(), write_archive, members=list(artifacts))

    def resolve(self, name: str) -> Optional[Path]:
        """
        Find the file of a live artifact.

        Returns:
            The path when the artifact exists, None when the name is unsafe,
            unknown or the artifact already expired
        """
        if not name or not SAFE_NAME_RE.match(name) or '..' in name:
            return None

        path = self.output_dir / name
        if not path.is_file():
            return None
        return path

    def delete_if_present(self, path: Path | str) -> bool:
        return delete_if_present(path)

    def discard(self, artifacts: Sequence[Artifact]) -> None:
        """Delete artifacts right away, e.g. when the operation creating them failed."""
        for artifact in artifacts:
            if self.delete_if_present(artifact.path):
                self._logger.debug(f'Discarded {artifact.name}')

    def sweep(self, now: Optional[float] = None) -> List[Path]:
        """
        Delete files in the output directory older than the retention window.

        Timers do not survive a restart; the sweep removes what they would
        have removed.

        Returns:
            The deleted paths
        """
        if not self.output_dir.is_dir():
            return []

        now = time.time() if now is None else now
        cutoff = now - self.retention.total_seconds()

        removed = []
        for entry in self.output_dir.iterdir():
            if entry.is_file() and entry.stat().st_mtime <= cutoff:
                if delete_if_present(entry):
                    removed.append(entry)

        if removed:
            self._logger.info(f'Swept {len(removed)} expired artifact(s) from {self.output_dir}')
        return removed

    def _write(self, naming: NamingScheme, writer, members: Optional[List[Artifact]] = None) -> Artifact:
        self.output_dir.mkdir(parents=True, exist_ok=True)

        name = naming.render(unique_stamp())
        path = self.output_dir / name
        created_at = datetime.now(timezone.utc)

        try:
            writer(path)
        except FileExistsError:
            raise
        except BaseException:
            delete_if_present(path)
            raise

        artifact = Artifact(
            name=name,
            path=path,
            kind=naming.kind,
            created_at=created_at,
            expires_at=created_at + self.retention,
            members=members or [],
        )
        self._scheduler.schedule(path, artifact.expires_at.timestamp())

        self._logger.info(f'Created {name}, expires at {artifact.expires_at.isoformat()}')
        return artifact

    @staticmethod
    def _write_exclusive(path: Path, data: bytes) -> None:
        with open(path, 'xb') as f:
            f.write(data)
