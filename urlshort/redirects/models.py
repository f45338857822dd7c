"""Data models for redirect rules."""

from pydantic import BaseModel, ConfigDict, StrictStr


class PathRule(BaseModel):
    """One configured path to URL pair."""
    
    model_config = ConfigDict(frozen=True, extra="ignore")
    
    path: StrictStr
    url: StrictStr
