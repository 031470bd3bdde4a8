"""
pagesplit API – upload module.

Receives a bundle archive, persists it to the upload directory and splits it
into page packages.
"""

import shutil
import threading
import uuid
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pagesplit.config import PipelineSettings, pipeline_settings
from pagesplit.splitting import archive_base_name, split_archive
from pagesplit.utils import get_logger

router = APIRouter(tags=["upload"])

logger = get_logger("api")

# In-process locks: base name → lock, so identical uploads run one at a time
_LOCKS: dict[str, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


class UploadResponse(BaseModel):
    """
    Response model for the `/upload` endpoint.

    Attributes:
        message: Human-readable status.
        base_name: Name the archive was normalized under.
        pages: Identifiers of the page packages produced.
    """

    message: str
    base_name: str
    pages: List[str]


def get_settings() -> PipelineSettings:
    """Settings used by the upload endpoint (overridable in tests)."""
    return pipeline_settings


def _lock_for(base_name: str) -> threading.Lock:
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(base_name, threading.Lock())


def _save_upload(upload: UploadFile, upload_dir: Path) -> Path:
    """
    Save the uploaded archive under its own filename in a fresh request directory.

    Each request gets a `<upload_dir>/<uuid>/` directory, so identical
    filenames uploaded concurrently never share a path.

    Args:
        upload: Uploaded archive.
        upload_dir: Parent of the per-request directories.

    Returns:
        Path to the saved archive.
    """
    request_dir = upload_dir / uuid.uuid4().hex
    request_dir.mkdir(parents=True)
    archive_path = request_dir / Path(upload.filename).name
    with archive_path.open("wb") as f:
        shutil.copyfileobj(upload.file, f)
    return archive_path


@router.post("/upload", response_model=UploadResponse)
def upload_archive(
    file: UploadFile | None = File(None, alias="zipFile", description="Bundle archive"),
    settings: PipelineSettings = Depends(get_settings),
):
    """
    Split an uploaded bundle archive into one package per page.

    Args:
        file: Archive uploaded by the client in the `zipFile` form field.
        settings: Pipeline settings.

    Returns:
        An UploadResponse listing the page packages, a 400 response when no
        file was sent or its name cannot be used, or a 500 response naming
        the failing stage.
    """
    if file is None or not file.filename or not Path(file.filename).name:
        return JSONResponse(status_code=400, content={"error": "No file uploaded"})

    filename = Path(file.filename).name
    base_name = archive_base_name(filename)
    if base_name in {"", ".", ".."}:
        return JSONResponse(
            status_code=400, content={"error": f"Invalid archive name: {filename}"}
        )

    archive_path = _save_upload(file, settings.upload_dir)
    logger.info("Received %s (%s) as %s", filename, base_name, archive_path)

    try:
        with _lock_for(base_name):
            outcome = split_archive(archive_path, base_name, settings=settings)
    except ValueError as e:
        logger.error("Rejected %s: %s", filename, e)
        return JSONResponse(status_code=400, content={"error": str(e)})
    finally:
        if not settings.keep_uploads:
            shutil.rmtree(archive_path.parent, ignore_errors=True)

    if not outcome.succeeded:
        logger.error(
            "Processing %s failed at %s: %s",
            archive_path.name,
            outcome.stage.value if outcome.stage else None,
            outcome.message,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Error processing file",
                "stage": outcome.stage.value if outcome.stage else None,
                "details": outcome.message,
            },
        )

    return UploadResponse(
        message="File uploaded and processed successfully!",
        base_name=base_name,
        pages=outcome.page_ids,
    )
