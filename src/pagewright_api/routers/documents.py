import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from pagewright_api.dependencies import get_workbench
from pagewright_api.models import ErrorResponse, OperationResponse
from pagewright_core.exceptions import InputValidationException, ProcessingException
from pagewright_core.facade.workbench import Workbench
from pagewright_core.services import UploadedFile

router = APIRouter(prefix="/api", tags=["documents"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


async def _accept(workbench: Workbench, files: List[UploadFile]) -> List[UploadedFile]:
    """Store the uploaded files, releasing the ones already stored if one is rejected."""
    accepted: List[UploadedFile] = []
    try:
        for file in files:
            data = await file.read()
            accepted.append(await run_in_threadpool(workbench.intake.accept, data, file.filename))
    except InputValidationException:
        for upload in accepted:
            upload.release()
        raise
    except Exception as e:
        for upload in accepted:
            upload.release()
        logger.exception("Unable to store upload.")
        raise ProcessingException("Error storing uploaded files") from e
    return accepted


@router.post("/merge", response_model=OperationResponse, responses=ERROR_RESPONSES)
async def merge(
        pdfs: Optional[List[UploadFile]] = File(None),
        workbench: Workbench = Depends(get_workbench),
) -> OperationResponse:
    logger.info(f"Received merge request with {len(pdfs or [])} file(s).")

    uploads = await _accept(workbench, pdfs or [])
    artifact = await run_in_threadpool(workbench.merge, uploads)

    return OperationResponse(download_url=f"/download/{artifact.name}")


@router.post("/split", response_model=OperationResponse, responses=ERROR_RESPONSES)
async def split(
        pdf: Optional[UploadFile] = File(None),
        pages: Optional[str] = Form(None),
        workbench: Workbench = Depends(get_workbench),
) -> OperationResponse:
    logger.info(f"Received split request for pages [{pages}].")

    upload = None
    if pdf is not None:
        upload = (await _accept(workbench, [pdf]))[0]
    artifact = await run_in_threadpool(workbench.split, upload, pages)

    return OperationResponse(download_url=f"/download/{artifact.name}")
