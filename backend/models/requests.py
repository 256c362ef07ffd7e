from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    # Amount checks happen in the service so they surface as {"error": ...}
    value: Optional[float] = None
    asset: str = "USD"
    mode: str = Field(default="short", description="short|long")
    region: str = Field(default="US", description="US|IN")
