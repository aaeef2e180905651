from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class LinkCreate(BaseModel):
    # left untyped so bad values reach the allocator and get its error messages
    url: Optional[Any] = None
    custom_code: Optional[Any] = Field(None, alias="customCode")

    model_config = ConfigDict(populate_by_name=True)


class LinkCreated(BaseModel):
    code: str
    url: str
    short_url: str = Field(alias="shortUrl")
    clicks: int
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class LinkOut(BaseModel):
    code: str
    url: str
    clicks: int
    last_clicked: Optional[datetime]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LinkList(BaseModel):
    links: List[LinkOut]


class MessageOut(BaseModel):
    ok: bool
    detail: str
