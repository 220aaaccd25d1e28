"""
Pydantic schemas for form submissions.

A submission carries the visitor's name, how to reach them and the
services they picked in the dropdown.  The order of ``services`` is
the order in which the options appear on the page and is preserved
all the way into the Telegram message.
"""

from typing import List

from pydantic import BaseModel, Field


class SubmissionRequest(BaseModel):
    """A validated contact form submission."""

    name: str = Field(..., min_length=1, description="Visitor name")
    contact: str = Field(..., min_length=1, description="Phone, e-mail or messenger handle")
    services: List[str] = Field(..., min_length=1, description="Selected services in page order")


class SendResult(BaseModel):
    """Body returned when the notification was delivered to Telegram."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Body returned for rejected submissions and relay failures."""

    error: str
