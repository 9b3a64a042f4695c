"""Schemas shared across endpoints."""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Confirmation returned by endpoints that have nothing else to return."""

    message: str
