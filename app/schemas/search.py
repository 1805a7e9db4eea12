from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.blog import PostSummary


class EasterEggResult(BaseModel):
    found: bool = False
    key: Optional[str] = None
    message: Optional[str] = None
    style: Dict[str, str] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    query: str
    results: List[PostSummary] = Field(default_factory=list)
    easterEgg: EasterEggResult = Field(default_factory=EasterEggResult)
