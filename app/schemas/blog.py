from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    fullPath: str
    title: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    date: str
    tags: List[str] = Field(default_factory=list)
    readingTime: Optional[str] = None
    extensions: Dict[str, Any] = Field(default_factory=dict)


class Post(PostSummary):
    body: str = ""

    def summary(self) -> PostSummary:
        return PostSummary(**self.model_dump(exclude={"body"}))


class AdjacentPosts(BaseModel):
    prev: Optional[PostSummary] = None
    next: Optional[PostSummary] = None


class TagSummary(BaseModel):
    name: str
    count: int
    slug: str
