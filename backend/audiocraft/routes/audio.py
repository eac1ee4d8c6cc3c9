"""
AudioCraft Backend: Audio Route Handler
=======================================

What:  POST /api/audio/enhance, the (stubbed) enhancement endpoint.
How:   Receives multipart/form-data with an `audio` file and a `settings`
       JSON string, delegates to AudioService, returns the result id and the
       caller's remaining credits.

Request Flow:
    1. get_current_account resolves the bearer token (401 / 404)
    2. The reported upload size is checked (400 when too large), then the
       upload is read into memory
    3. AudioService stores it, charges a credit (403 when exhausted),
       issues a result id, and deletes the upload
    4. 200 with EnhanceResponse
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from audiocraft.database import AccountStore, get_account_store
from audiocraft.dependencies import get_current_account
from audiocraft.models.account import Account
from audiocraft.schemas.audio import EnhanceResponse
from audiocraft.schemas.common import ErrorResponse
from audiocraft.services.audio_service import audio_service
from audiocraft.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/audio", tags=["Audio"])


@router.post(
    "/enhance",
    response_model=EnhanceResponse,
    responses={
        400: {"description": "Upload too large", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "No credits remaining", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Processing failed", "model": ErrorResponse},
    },
    summary="Enhance an audio track",
    description=(
        "Upload an audio file with optional enhancement settings. Charges one free "
        "credit unless the account has an active subscription."
    ),
)
async def enhance_audio(
    audio: Optional[UploadFile] = File(default=None, description="Audio file to enhance"),
    settings: Optional[str] = Form(default=None, description="Enhancement settings as a JSON string"),
    account: Account = Depends(get_current_account),
    store: AccountStore = Depends(get_account_store),
) -> EnhanceResponse:
    content: Optional[bytes] = None
    filename: Optional[str] = None
    try:
        if audio is not None:
            # Reject on the reported size before buffering the body
            if audio.size is not None:
                file_service.validate_size(audio.size)
            content = await audio.read()
            filename = audio.filename
            logger.info(
                "Received enhance request: filename=%s, size=%d bytes",
                filename or "unknown",
                len(content),
            )

        return await audio_service.enhance(
            store=store,
            account=account,
            content=content,
            filename=filename,
            settings_payload=settings,
        )
    finally:
        if audio is not None:
            await audio.close()
