"""
Defines Pydantic models for API request/response validation and serialization.

Models:
    - DecodeRequest: A pump response payload to decode
    - DecodeResponse: The decoded value and its type
    - PumpModelUpdate: Request body to set the session pump model
    - PumpModelInfo: The session pump model and its generation parameters
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DecodeRequest(BaseModel):
    """A raw pump response to decode."""

    command: str = Field(..., description="Pump command name, e.g. 'GetBatteryStatus'.")
    payload_hex: str = Field(
        ..., description="Response payload as hex; spaces and ':' separators are allowed."
    )

    @field_validator("payload_hex")
    @classmethod
    def normalize_hex(cls, value: str) -> str:
        cleaned = value.replace(" ", "").replace(":", "").strip()
        if len(cleaned) % 2 != 0:
            raise ValueError("payload_hex must contain an even number of hex digits")
        try:
            bytes.fromhex(cleaned)
        except ValueError as e:
            raise ValueError(f"payload_hex is not valid hex: {e}") from e
        return cleaned.upper()

    def payload(self) -> bytes:
        return bytes.fromhex(self.payload_hex)


class DecodeResponse(BaseModel):
    command: str
    result_type: str
    result: Any = None


class PumpModelUpdate(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_code: str = Field(..., description="Pump model code, e.g. '523'.")


class PumpModelInfo(BaseModel):
    """The pump model currently held by the daemon's session store."""

    model_config = ConfigDict(protected_namespaces=())

    model: str
    model_code: str
    bolus_strokes: int
    is_523_or_higher: bool
