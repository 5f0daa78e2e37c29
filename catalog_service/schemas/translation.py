"""
Pydantic schemas for Translation API
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime


class TagResponse(BaseModel):
    """Schema for tag in responses"""
    id: int
    name: str

    class Config:
        from_attributes = True


class TranslationCreate(BaseModel):
    """Schema for creating a translation"""
    key: str = Field(..., min_length=1, max_length=255)
    value: str = Field(..., min_length=1)
    locale: str = Field(..., min_length=1, max_length=10, pattern=r"^[A-Za-z0-9_-]+$")
    tags: Optional[List[str]] = None


class TranslationUpdate(BaseModel):
    """Schema for updating a translation (all fields optional)"""
    key: Optional[str] = Field(None, min_length=1, max_length=255)
    value: Optional[str] = Field(None, min_length=1)
    locale: Optional[str] = Field(None, min_length=1, max_length=10, pattern=r"^[A-Za-z0-9_-]+$")
    tags: Optional[List[str]] = None


class TranslationResponse(BaseModel):
    """Schema for translation response"""
    id: int
    key: str
    value: str
    locale: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: List[TagResponse] = []

    class Config:
        from_attributes = True


class TranslationPage(BaseModel):
    """Paginated listing"""
    data: List[TranslationResponse]
    current_page: int
    per_page: int
    total: int
    last_page: int


class ExportResponse(BaseModel):
    """Flat key -> value export for one locale"""
    locale: str
    translations: Dict[str, str]
    count: int
    generated_at: str


class LocalesResponse(BaseModel):
    locales: List[str]


class TagsResponse(BaseModel):
    tags: List[str]


class MessageResponse(BaseModel):
    message: str
