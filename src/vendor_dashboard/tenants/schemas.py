"""Pydantic schemas for config endpoints."""

from pydantic import BaseModel


class ConfigSummary(BaseModel):
    id: str
    school_name: str

    model_config = {"from_attributes": True}
