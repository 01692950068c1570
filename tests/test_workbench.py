"""Test suite for the Workbench facade."""

import zipfile

import pytest

from pagewright_core.exceptions import InputValidationException, ProcessingException
from pagewright_core.facade.workbench import Workbench
from pagewright_core.models.config import PagewrightConfig


@pytest.fixture
def config(tmp_path):
    return PagewrightConfig(
        upload_dir=str(tmp_path / 'uploads'),
        output_dir=str(tmp_path / 'results'),
    )


@pytest.fixture
def workbench(config):
    return Workbench.from_config(config)


@pytest.fixture
def accept(workbench, pdf_bytes):
    def _accept(label: str, pages: int):
        return workbench.intake.accept(pdf_bytes(label, pages), f'{label}.pdf')

    return _accept


@pytest.fixture
def accept_into(pdf_bytes):
    def _accept(workbench, label: str, pages: int):
        return workbench.intake.accept(pdf_bytes(label, pages), f'{label}.pdf')

    return _accept


def uploads_left(workbench):
    return list(workbench.intake.upload_dir.iterdir())


def artifacts(workbench):
    if not workbench.store.output_dir.exists():
        return []
    return sorted(path.name for path in workbench.store.output_dir.iterdir())


class TestMerge:
    def test_merge_creates_artifact(self, workbench, accept, page_texts):
        artifact = workbench.merge([accept('doc1', 2), accept('doc2', 3), accept('doc3', 1)])

        assert artifact.name.startswith('merged_')
        assert workbench.resolve(artifact.name) == artifact.path
        assert len(page_texts(artifact.path)) == 6
        assert uploads_left(workbench) == []

    def test_merge_with_one_file_is_rejected_and_cleaned_up(self, workbench, accept):
        with pytest.raises(InputValidationException) as excinfo:
            workbench.merge([accept('doc1', 2)])

        assert excinfo.value.message == 'Please upload at least 2 PDF files'
        assert uploads_left(workbench) == []
        assert artifacts(workbench) == []

    def test_merge_with_too_many_files_is_rejected(self, workbench, accept):
        uploads = [accept(f'doc{i}', 1) for i in range(11)]

        with pytest.raises(InputValidationException):
            workbench.merge(uploads)

        assert uploads_left(workbench) == []

    def test_merge_with_malformed_pdf(self, workbench, accept):
        broken = workbench.intake.accept(b'not a pdf', 'broken.pdf')

        with pytest.raises(ProcessingException) as excinfo:
            workbench.merge([accept('doc1', 1), broken, accept('doc3', 1)])

        assert excinfo.value.message == 'Error merging PDFs'
        assert uploads_left(workbench) == []
        assert artifacts(workbench) == []


class TestSplit:
    def test_split_single_group_returns_pdf(self, workbench, accept, page_texts):
        artifact = workbench.split(accept('doc', 5), '2-3')

        assert artifact.kind == 'split'
        assert artifact.name.startswith('split_2-3_')
        assert page_texts(artifact.path) == ['doc page 2', 'doc page 3']
        assert uploads_left(workbench) == []

    def test_split_several_groups_returns_bundle(self, workbench, accept, page_texts):
        artifact = workbench.split(accept('doc', 5), '1,3-4')

        assert artifact.kind == 'bundle'
        assert artifact.name.startswith('split_results_')
        with zipfile.ZipFile(artifact.path) as archive:
            names = archive.namelist()
            assert len(names) == 2
            assert names[0].startswith('split_1-1_')
            assert names[1].startswith('split_3-4_')
            assert page_texts(archive.read(names[0])) == ['doc page 1']
            assert page_texts(archive.read(names[1])) == ['doc page 3', 'doc page 4']
        # Standalone members stay next to the archive
        assert len(artifacts(workbench)) == 3
        assert workbench.scheduler.pending == 3

    @pytest.mark.parametrize('pages', ['2-1', '1-10', 'abc', '', None])
    def test_split_invalid_range(self, workbench, accept, pages):
        with pytest.raises(InputValidationException) as excinfo:
            workbench.split(accept('doc', 5), pages)

        assert excinfo.value.message == 'Invalid page range'
        assert uploads_left(workbench) == []
        assert artifacts(workbench) == []

    def test_split_without_upload(self, workbench):
        with pytest.raises(InputValidationException) as excinfo:
            workbench.split(None, '1')

        assert excinfo.value.message == 'Please upload a PDF file'

    def test_split_malformed_pdf(self, workbench):
        upload = workbench.intake.accept(b'garbage', 'doc.pdf')

        with pytest.raises(ProcessingException) as excinfo:
            workbench.split(upload, '1')

        assert excinfo.value.message == 'Error splitting PDF'
        assert uploads_left(workbench) == []

    def test_split_failure_discards_persisted_members(self, workbench, accept, monkeypatch):
        def failing_bundle(members):
            raise OSError('disk full')

        monkeypatch.setattr(workbench.store, 'bundle', failing_bundle)

        with pytest.raises(ProcessingException):
            workbench.split(accept('doc', 5), '1,2')

        assert artifacts(workbench) == []
        assert uploads_left(workbench) == []


class TestExpiry:
    def test_artifact_absent_after_retention(self, workbench, accept):
        artifact = workbench.split(accept('doc', 2), '1')

        workbench.scheduler.run_pending(now=artifact.expires_at.timestamp())

        assert workbench.resolve(artifact.name) is None


class TestLogging:
    def test_logging_file_receives_operation_records(self, tmp_path, accept_into):
        log_file = tmp_path / 'logs' / 'pagewright.log'
        config = PagewrightConfig(
            upload_dir=str(tmp_path / 'uploads'),
            output_dir=str(tmp_path / 'results'),
            logging_file=str(log_file),
        )
        workbench = Workbench.from_config(config)

        workbench.merge([accept_into(workbench, 'doc1', 1), accept_into(workbench, 'doc2', 1)])

        assert 'Merged 2 documents into 2 pages' in log_file.read_text(encoding='utf-8')
