"""Guest upload QR code schemas."""

from pydantic import BaseModel, Field


class QRCodeResponse(BaseModel):
    """Where guests upload, and where to fetch the code that links there."""

    upload_url: str = Field(..., alias="uploadUrl")
    qr_code_url: str = Field(..., alias="qrCodeUrl")

    model_config = {"populate_by_name": True}
