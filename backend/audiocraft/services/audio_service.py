"""
AudioCraft Backend: Audio Enhancement Service (stub)
====================================================

What:  Orchestrates POST /api/audio/enhance: store upload → charge credit →
       read settings → issue result id → discard upload.
How:   Composes FileService and EntitlementService. No audio is decoded or
       transformed; the result id names a result that is never produced.
Who:   Called by the audio route with an already-resolved account.

Orchestration Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Upload  │───▶│  Store      │───▶│  Charge      │───▶│  Result  │
    │  (Route) │    │  (FileServ) │    │  (Entitle.)  │    │  id      │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘
                           │                                     │
                           └────────── cleanup_file() ◀──────────┘
                                      (always, in finally)

Settings leniency:
    The `settings` form field is read as a JSON object. Anything that is not
    a JSON object (bad JSON, a list, a number) becomes {} without an error.
"""

import json
import logging
import uuid
from typing import Any, Dict, Optional

from audiocraft.database import AccountStore
from audiocraft.models.account import Account
from audiocraft.schemas.audio import EnhanceResponse
from audiocraft.services.entitlement_service import entitlement_service
from audiocraft.services.file_service import file_service

logger = logging.getLogger(__name__)


def parse_settings(raw: Optional[str]) -> Dict[str, Any]:
    """Read an enhancement settings blob, falling back to {}."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring malformed settings payload (%d chars)", len(raw))
        return {}
    if not isinstance(value, dict):
        return {}
    return value


class AudioService:

    async def enhance(
        self,
        store: AccountStore,
        account: Account,
        content: Optional[bytes] = None,
        filename: Optional[str] = None,
        settings_payload: Optional[str] = None,
    ) -> EnhanceResponse:
        """
        Run one (simulated) enhancement for `account`.

        Args:
            store: Account store used for the credit charge
            account: The caller, already resolved from the bearer token
            content: Uploaded audio bytes, or None when no file was sent
            filename: Original upload filename (only its extension is kept)
            settings_payload: Raw `settings` form value

        Raises:
            ValidationError: upload too large (checked before any charge)
            FileStorageError: upload could not be written
            CreditsExhaustedError: no subscription and no credits left
        """
        stored_path: Optional[str] = None
        try:
            if content is not None:
                stored_path = await file_service.store_upload(content, filename)

            remaining = entitlement_service.authorize_and_charge(store, account)

            enhance_settings = parse_settings(settings_payload)
            file_id = str(uuid.uuid4())
            logger.info(
                "Audio processed for account %s: file_id=%s settings=%s",
                account.id,
                file_id,
                enhance_settings,
            )

            return EnhanceResponse(
                file_id=file_id,
                message="Audio enhancement complete",
                credits_remaining=remaining,
            )
        finally:
            await file_service.cleanup_file(stored_path)


audio_service = AudioService()
