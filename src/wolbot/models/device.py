"""Device registry models."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from wolbot.models.validation import clean_name, parse_mac


class DeviceRecord(BaseModel):
    """A named machine that can be woken up."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    mac: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return clean_name(value)

    @field_validator("mac")
    @classmethod
    def _check_mac(cls, value: str) -> str:
        return parse_mac(value)

    @classmethod
    def create(cls, name: str, mac: str) -> DeviceRecord:
        """Build a record, raising wolbot errors instead of ValidationError."""
        return cls(name=clean_name(name), mac=parse_mac(mac))
