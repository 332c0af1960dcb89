from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from .common import BaseRequest, BaseResponse, CamelModel, Pagination
from .user import AuthorOut


class AnnouncementCreateReq(BaseRequest):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=10000)
    season_id: Optional[int] = None
    is_published: bool = False
    is_pinned: bool = False
    priority: int = Field(1, ge=1, le=3)
    expires_at: Optional[datetime] = None


class AnnouncementUpdateReq(BaseRequest):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=10000)
    season_id: Optional[int] = None
    is_published: Optional[bool] = None
    is_pinned: Optional[bool] = None
    priority: Optional[int] = Field(None, ge=1, le=3)
    expires_at: Optional[datetime] = None

    @model_validator(mode="after")
    def has_changes(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class AnnouncementOut(CamelModel):
    id: int
    title: str
    content: str
    season_id: Optional[int] = None
    author: AuthorOut
    is_published: bool
    published_at: Optional[datetime] = None
    is_pinned: bool
    priority: int
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AnnouncementResp(BaseResponse):
    data: AnnouncementOut


class AnnouncementListResp(BaseResponse):
    data: List[AnnouncementOut] = Field(default_factory=list)
    pagination: Pagination
