import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from marketplace.auth.dependencies import get_current_user
from marketplace.config import Settings
from marketplace.deps import get_settings
from marketplace.errors import bad_request
from marketplace.utils.s3 import safe_file_name, upload_file_to_s3

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Image Upload"])


@router.post("", status_code=201)
async def upload_images(
    request: Request,
    files: Optional[List[UploadFile]] = File(None),
    user: str = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    if not files:
        raise bad_request("No files uploaded")
    if len(files) > settings.upload_max_files:
        raise bad_request("Too many files", details=f"At most {settings.upload_max_files} files per upload")

    payloads = []
    for file in files:
        # never buffer more than one byte past the limit
        content = await file.read(settings.upload_max_bytes + 1)
        if len(content) > settings.upload_max_bytes:
            raise bad_request("File too large", details=f"{file.filename} exceeds {settings.upload_max_bytes} bytes")
        payloads.append((safe_file_name(file.filename), content, file.content_type))

    client = request.app.state.s3_client
    urls = [upload_file_to_s3(client, settings, content, name, content_type) for name, content, content_type in payloads]
    logger.info("%s uploaded %d file(s)", user, len(urls))
    return {"urls": urls}
