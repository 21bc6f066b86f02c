"""Contact form payload model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContactMessage(BaseModel):
    """Demo contact form submission; never stored or delivered."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=320)
    message: str = Field(min_length=1, max_length=5000)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
