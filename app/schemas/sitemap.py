from typing import Literal, Optional

from pydantic import BaseModel, Field

ChangeFreq = Literal[
    "always", "hourly", "daily", "weekly", "monthly", "yearly", "never"
]


class SitemapEntry(BaseModel):
    url: str
    changefreq: ChangeFreq = "weekly"
    priority: float = Field(0.5, ge=0, le=1)
    lastmod: Optional[str] = None
