"""
HTTP routes for the portfolio backend API.
"""

from __future__ import annotations

import logging
import os
import random
import re
import resource
import time
from datetime import datetime, timezone

import requests
from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import RedirectResponse
from pydantic import ValidationError as SchemaError

from backend import content
from backend.config import get_settings
from backend.dependencies import (
    client_id,
    enforce_contact_limit,
    get_mailer,
    get_repository_source,
    get_upload_storage,
)
from backend.errors import UpstreamError, ValidationError
from backend.github import RepositorySource
from backend.mailer import ContactMessage, DeliveryError, Mailer
from backend.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    ContactRequest,
    ContactResponse,
    ErrorResponse,
    GithubRepo,
    HealthResponse,
    UploadedFileInfo,
    UploadResponse,
)
from backend.storage import UploadStorage

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
ALLOWED_EXTENSIONS = re.compile(r"jpeg|jpg|png|gif|pdf|doc|docx|shp|kml|geojson")
# GeoJSON is served as application/geo+json, which the extension list misses.
ALLOWED_MIME_TYPES = re.compile(r"jpeg|jpg|png|gif|pdf|doc|docx|shp|kml|geojson|geo\+json")
UPLOAD_FIELD = "gisFile"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _iso_now() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def validate_contact(payload: ContactRequest) -> ContactMessage:
    """
    Check a contact submission before anything is sent.

    Raises:
        ValidationError: A field is missing or blank, or the email is malformed.
    """
    fields = [payload.name, payload.email, payload.subject, payload.message]
    if any(value is None or not value.strip() for value in fields):
        raise ValidationError("All fields are required")

    email = payload.email.strip()
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("Please provide a valid email address")

    return ContactMessage(
        name=payload.name.strip(),
        email=email,
        subject=payload.subject.strip(),
        message=payload.message,
    )


def _check_upload_type(filename: str, mimetype: str) -> str:
    extension = os.path.splitext(filename)[1]
    if not (
        extension
        and ALLOWED_EXTENSIONS.search(extension.lower())
        and ALLOWED_MIME_TYPES.search(mimetype.lower())
    ):
        raise ValidationError(
            "Invalid file type. Only images, documents, and GIS files are allowed."
        )
    return extension


def _stored_filename(extension: str) -> str:
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{UPLOAD_FIELD}-{unique_suffix}{extension}"


def _api_base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/") + get_settings().api_prefix


@router.get("")
def api_index(request: Request):
    settings = get_settings()
    return {
        "message": "Welcome to Annan Shrestha Portfolio API",
        "version": settings.app_version,
        "documentation": f"{_api_base_url(request)}/docs",
        "endpoints": [settings.api_prefix + path for path in content.API_ENDPOINT_LIST],
        "author": content.API_AUTHOR,
    }


@router.get("/docs")
def api_docs(request: Request):
    """
    Hand-written endpoint map for people browsing the API, separate from the
    generated OpenAPI schema.
    """
    base_url = _api_base_url(request)
    return {
        "title": "Annan Shrestha Portfolio API",
        "version": get_settings().app_version,
        "description": "RESTful API for GIS Portfolio with spatial data processing capabilities",
        "baseUrl": base_url,
        "endpoints": content.API_ENDPOINTS,
        "examples": {
            "portfolio": f"{base_url}/portfolio",
            "contact": {
                "url": f"{base_url}/contact",
                "method": "POST",
                "headers": {"Content-Type": "application/json"},
                "body": content.CONTACT_EXAMPLE,
            },
            "gisData": f"{base_url}/gis/data/points",
        },
    }


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    settings = get_settings()
    # ru_maxrss is reported in kilobytes on Linux.
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss * 1024
    return HealthResponse(
        status="OK",
        timestamp=_iso_now(),
        uptime=time.monotonic() - request.app.state.start_time,
        memory={"maxRss": max_rss},
        version=settings.app_version,
    )


@router.get("/portfolio")
def portfolio():
    return content.PORTFOLIO


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(enforce_contact_limit)],
)
def contact(payload: ContactRequest, mailer: Mailer = Depends(get_mailer)):
    """
    Relay a contact form submission to the site owner's inbox.
    """
    message = validate_contact(payload)
    try:
        mailer.send(message)
    except DeliveryError as exc:
        logger.error("Contact form delivery failed: %s", exc)
        raise UpstreamError("Failed to send message. Please try again later.") from exc

    logger.info(
        "Contact form submitted by %s (%s) at %s", message.name, message.email, _iso_now()
    )
    return ContactResponse(
        success=True,
        message="Message sent successfully! I will get back to you soon.",
    )


@router.get(
    "/github/repos",
    response_model=list[GithubRepo],
    responses={500: ERROR_RESPONSES[500]},
)
def github_repos(source: RepositorySource = Depends(get_repository_source)):
    try:
        return [GithubRepo(**repo) for repo in source.list_repos()]
    except (requests.RequestException, ValueError, SchemaError) as exc:
        logger.error("GitHub repository listing failed: %s", exc)
        raise UpstreamError("Failed to fetch GitHub repositories") from exc


@router.post(
    "/upload/gis",
    response_model=UploadResponse,
    responses={400: ERROR_RESPONSES[400]},
)
async def upload_gis(
    gisFile: UploadFile | None = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
):
    if gisFile is None or not gisFile.filename:
        raise ValidationError("No file uploaded")

    mimetype = gisFile.content_type or "application/octet-stream"
    extension = _check_upload_type(gisFile.filename, mimetype)

    max_bytes = get_settings().max_upload_bytes
    data = await gisFile.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
        )

    filename = _stored_filename(extension)
    path = storage.save(filename, data, mimetype)
    file_info = UploadedFileInfo(
        filename=filename,
        originalName=gisFile.filename,
        size=len(data),
        mimetype=mimetype,
        uploadDate=_iso_now(),
        path=path,
    )
    logger.info("GIS file uploaded: %s", file_info.model_dump())
    return UploadResponse(
        success=True, message="File uploaded successfully", file=file_info
    )


@router.post("/gis/analyze", response_model=AnalysisResponse)
def analyze_gis(payload: AnalysisRequest):
    """
    Canned analysis result; no spatial computation happens here.
    """
    results = dict(content.ANALYSIS_RESULTS)
    results["metadata"] = {**results["metadata"], "processedAt": _iso_now()}
    return AnalysisResponse(
        id=str(int(time.time() * 1000)),
        dataType=payload.dataType,
        analysisType=payload.analysisType,
        parameters=payload.parameters,
        status="completed",
        results=results,
    )


@router.get("/gis/data/{data_type}")
def spatial_data(data_type: str):
    return content.SPATIAL_SAMPLES.get(
        data_type, content.SPATIAL_SAMPLES[content.DEFAULT_SPATIAL_SAMPLE]
    )


@router.get("/publications")
def publications():
    return content.PUBLICATIONS


@router.get("/analytics")
def analytics():
    return {**content.ANALYTICS, "lastUpdated": _iso_now()}


@router.get("/blog")
def blog():
    return content.BLOG_POSTS


@router.get("/resume/download")
def resume_download(request: Request):
    logger.info("Resume downloaded at %s from IP: %s", _iso_now(), client_id(request))
    return RedirectResponse(get_settings().resume_url, status_code=302)
