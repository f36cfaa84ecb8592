"""
Pydantic schemas for the portfolio API.

Request fields are optional so that presence checks happen in the handlers
and produce the API's own 400 messages.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BlogCreate(_CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class ProjectCreate(_CamelModel):
    title: Optional[str] = None
    overview: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    file_url: Optional[str] = Field(default=None, alias="fileUrl")


class EmailRequest(BaseModel):
    email: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class BlogOut(_CamelModel):
    id: str = Field(alias="_id")
    title: str
    content: str
    image_url: str = Field(alias="imageUrl")


class ProjectOut(_CamelModel):
    id: str = Field(alias="_id")
    title: str
    overview: str
    image_url: str = Field(alias="imageUrl")
    file_url: str = Field(alias="fileUrl")
