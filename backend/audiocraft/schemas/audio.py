"""
AudioCraft Backend: Audio Schemas
=================================

What:  Response contract for POST /api/audio/enhance.

The request is multipart/form-data (an `audio` file and a `settings` JSON
string), so it is declared with File()/Form() parameters in the route rather
than as a model here.
"""

from pydantic import Field

from audiocraft.schemas.common import CamelModel


class EnhanceResponse(CamelModel):
    success: bool = True
    file_id: str = Field(description="Identifier of the enhanced result")
    message: str = Field(default="Audio enhancement complete")
    credits_remaining: int = Field(description="Free credits left after this request")
