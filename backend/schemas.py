"""
Pydantic schemas for the portfolio backend.

Field names follow the JSON the front-end already consumes, which is why
some of them are camelCase.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: Literal["OK"]
    timestamp: str
    uptime: float
    memory: dict[str, int]
    version: str


class ContactRequest(BaseModel):
    # Presence is checked by the route so a missing field gets the same
    # 400 as an empty one.
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool
    message: str


class GithubRepo(BaseModel):
    name: str
    description: Optional[str] = None
    html_url: str
    updated_at: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0


class UploadedFileInfo(BaseModel):
    filename: str
    originalName: str
    size: int
    mimetype: str
    uploadDate: str
    path: str


class UploadResponse(BaseModel):
    success: bool
    message: str
    file: UploadedFileInfo


class AnalysisRequest(BaseModel):
    dataType: Optional[Any] = None
    analysisType: Optional[Any] = None
    parameters: Optional[Any] = None


class AnalysisResponse(BaseModel):
    id: str
    dataType: Optional[Any] = None
    analysisType: Optional[Any] = None
    parameters: Optional[Any] = None
    status: Literal["completed"]
    results: dict
