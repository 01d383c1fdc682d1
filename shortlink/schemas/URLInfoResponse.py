from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

# Response DTOs
class URLCreateResponse(BaseModel):
    original_url: str
    short_url: str
    message: Optional[str] = None


class URLStats(BaseModel):
    original_url: str
    short_code: str
    alias: Optional[str] = None
    created_at: datetime
    access_count: int
    # last_accessed_at on the model, last_accessed on the wire
    last_accessed_at: Optional[datetime] = Field(None, serialization_alias="last_accessed")

    model_config = {"from_attributes": True}


class URLStatsResponse(BaseModel):
    stats: URLStats
