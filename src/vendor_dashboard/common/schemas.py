"""Shared Pydantic schemas for Vendor-Dashboard."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "vendor-dashboard"
    database: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
    code: str


class MessageResponse(BaseModel):
    message: str
