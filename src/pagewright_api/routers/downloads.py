import logging

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, JSONResponse

from pagewright_api.dependencies import get_workbench
from pagewright_core.facade.workbench import Workbench

router = APIRouter(tags=["downloads"])
logger = logging.getLogger(__name__)

MEDIA_TYPES = {".pdf": "application/pdf", ".zip": "application/zip"}


@router.get("/download/{filename}")
def download(filename: str, workbench: Workbench = Depends(get_workbench)):
    path = workbench.resolve(filename)
    if path is None:
        logger.info(f"Download miss for [{filename}].")
        return JSONResponse(status_code=404, content={"error": "File not found"})

    return FileResponse(
        path,
        filename=path.name,
        media_type=MEDIA_TYPES.get(path.suffix, "application/octet-stream"),
    )
