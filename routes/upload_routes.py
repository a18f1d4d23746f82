# upload_routes.py
from fastapi import APIRouter, HTTPException, Depends, File, Query, Request, UploadFile
from typing import List, Optional
from datetime import datetime, timezone
import logging
import os
import uuid

import config
from models.enums import UploadType, UserRole
from models.user import UserPublic
from routes.auth_routes import get_current_user, require_role

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])

STATIC_PREFIX = "/static/uploads"

EXTENSIONS = {
    UploadType.IMAGE: {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg"},
    UploadType.AUDIO: {".mp3", ".wav", ".ogg", ".m4a", ".aac", ".flac", ".amr"},
}
ALLOWED_EXTENSIONS = EXTENSIONS[UploadType.IMAGE] | EXTENSIONS[UploadType.AUDIO]


def public_url(request: Request, filename: str) -> str:
    return f"{str(request.base_url).rstrip('/')}{STATIC_PREFIX}/{filename}"


# -------------------- Upload attachments -------------------- #
@router.post("/")
def upload_files(
    request: Request,
    files: List[UploadFile] = File(...),
    current_user: UserPublic = Depends(get_current_user),
):
    if len(files) > config.MAX_UPLOAD_FILES:
        raise HTTPException(
            status_code=400,
            detail=f"At most {config.MAX_UPLOAD_FILES} files per report",
        )

    os.makedirs(config.UPLOAD_DIR, exist_ok=True)

    # Validate everything before writing anything
    for upload in files:
        extension = os.path.splitext(upload.filename or "")[1].lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise HTTPException(
                status_code=400,
                detail=f"File type not allowed: {upload.filename}",
            )

        upload.file.seek(0, 2)
        file_size = upload.file.tell()
        upload.file.seek(0)
        if file_size > config.MAX_FILE_SIZE:
            raise HTTPException(
                status_code=400,
                detail=f"File {upload.filename} exceeds the 5MB limit",
            )

    urls = []
    written = []
    try:
        for upload in files:
            extension = os.path.splitext(upload.filename)[1].lower()
            filename = f"{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex}{extension}"
            path = os.path.join(config.UPLOAD_DIR, filename)
            written.append(path)
            with open(path, "wb") as out:
                out.write(upload.file.read())
            urls.append(public_url(request, filename))
    except OSError as e:
        # All or nothing: drop whatever this request already wrote
        for path in written:
            if os.path.exists(path):
                os.remove(path)
        logger.error("Upload by %s failed: %s", current_user.id, e)
        raise HTTPException(status_code=500, detail="Could not store uploaded files")

    logger.info("User %s uploaded %d file(s)", current_user.id, len(urls))
    return {"urls": urls}


# -------------------- List stored files (admin) -------------------- #
@router.get("/")
def list_uploads(
    request: Request,
    type: Optional[UploadType] = Query(None),
    current_user: UserPublic = Depends(require_role(UserRole.ADMIN)),
):
    if not os.path.isdir(config.UPLOAD_DIR):
        return {"items": []}

    allowed = EXTENSIONS[type] if type else ALLOWED_EXTENSIONS
    items = []
    for entry in sorted(os.scandir(config.UPLOAD_DIR), key=lambda e: e.name):
        if not entry.is_file():
            continue
        if os.path.splitext(entry.name)[1].lower() not in allowed:
            continue
        items.append({"filename": entry.name, "url": public_url(request, entry.name)})
    return {"items": items}
