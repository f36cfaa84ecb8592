"""
HTTP routes for the portfolio API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from portfolio.config import Settings, get_settings
from portfolio.db import DbClient
from portfolio.dependencies import get_db_client, get_mail_client
from portfolio.errors import MailError, StorageError, ValidationError
from portfolio.mail import MailClient
from portfolio.notifier import build_subscription_email
from portfolio.schemas import (
    BlogCreate,
    BlogOut,
    EmailRequest,
    MessageResponse,
    ProjectCreate,
    ProjectOut,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_FIELDS_REQUIRED = "All fields are required"


def _log_body(payload: BaseModel) -> None:
    logger.info(
        "Request Body: %s", payload.model_dump_json(by_alias=True, exclude_unset=True)
    )


def _require_fields(payload: BaseModel, log_message: str) -> None:
    if not all(getattr(payload, name) for name in type(payload).model_fields):
        logger.error(log_message)
        raise ValidationError(ALL_FIELDS_REQUIRED)


@router.post("/blogs", response_model=MessageResponse)
def create_blog(
    payload: Optional[BlogCreate] = None,
    db: DbClient = Depends(get_db_client),
):
    logger.info("Request to create a new blog")
    payload = payload or BlogCreate()
    _log_body(payload)
    _require_fields(payload, "Missing required fields for blog creation")

    try:
        db.create_blog(payload.title, payload.content, payload.image_url)
    except StorageError as exc:
        raise StorageError("Error creating blog", exc.detail) from exc
    logger.info("Blog created successfully")
    return MessageResponse(message="Blog created successfully")


@router.get("/blogs", response_model=list[BlogOut])
def list_blogs(db: DbClient = Depends(get_db_client)):
    logger.info("Request to fetch all blogs")
    try:
        blogs = db.list_blogs()
    except StorageError as exc:
        raise StorageError("Error fetching blogs", exc.detail) from exc
    return [blog.as_dict() for blog in blogs]


@router.post("/projects", response_model=MessageResponse)
def create_project(
    payload: Optional[ProjectCreate] = None,
    db: DbClient = Depends(get_db_client),
):
    logger.info("Request to create a new project")
    payload = payload or ProjectCreate()
    _log_body(payload)
    _require_fields(payload, "Missing required fields for project creation")

    try:
        db.create_project(
            payload.title, payload.overview, payload.image_url, payload.file_url
        )
    except StorageError as exc:
        raise StorageError("Error creating project", exc.detail) from exc
    logger.info("Project created successfully")
    return MessageResponse(message="Project created successfully")


@router.get("/projects", response_model=list[ProjectOut])
def list_projects(db: DbClient = Depends(get_db_client)):
    logger.info("Request to fetch all projects")
    try:
        projects = db.list_projects()
    except StorageError as exc:
        raise StorageError("Error fetching projects", exc.detail) from exc
    return [project.as_dict() for project in projects]


@router.post("/send-email", response_model=MessageResponse)
async def send_email(
    payload: Optional[EmailRequest] = None,
    mail: MailClient = Depends(get_mail_client),
    settings: Settings = Depends(get_settings),
):
    """
    Send the subscription confirmation. The request completes only after the
    transport accepts or rejects the message.
    """
    email = payload.email if payload else None
    if not email:
        logger.error("Email is required")
        raise ValidationError("Email is required")

    message = build_subscription_email(email, settings)
    try:
        response = await mail.send(message)
    except MailError as exc:
        raise MailError("Error sending email", exc.detail) from exc
    logger.info("Email sent: %s", response)
    return MessageResponse(message="Email sent successfully")
