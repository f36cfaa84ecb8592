"""
Record store for blog posts and projects: a SQLAlchemy implementation and an
in-memory one for tests and local runs.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Protocol

from sqlalchemy import Column, Float, String, Text, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from portfolio.errors import StorageError


class DbClient(Protocol):
    """Interface for record store access."""

    def create_blog(self, title: str, content: str, image_url: str) -> "BlogRecord":
        ...

    def list_blogs(self) -> list["BlogRecord"]:
        ...

    def create_project(
        self, title: str, overview: str, image_url: str, file_url: str
    ) -> "ProjectRecord":
        ...

    def list_projects(self) -> list["ProjectRecord"]:
        ...


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class BlogRecord:
    title: str
    content: str
    image_url: str
    id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=lambda: time.time())

    def as_dict(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "content": self.content,
            "imageUrl": self.image_url,
        }


@dataclass
class ProjectRecord:
    title: str
    overview: str
    image_url: str
    file_url: str
    id: str = field(default_factory=_new_id)
    created_at: float = field(default_factory=lambda: time.time())

    def as_dict(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "overview": self.overview,
            "imageUrl": self.image_url,
            "fileUrl": self.file_url,
        }


class InMemoryDbClient:
    """Simple in-memory record store for development and tests."""

    def __init__(self):
        self.blogs: Dict[str, BlogRecord] = {}
        self.projects: Dict[str, ProjectRecord] = {}

    def create_blog(self, title: str, content: str, image_url: str) -> BlogRecord:
        record = BlogRecord(title=title, content=content, image_url=image_url)
        self.blogs[record.id] = record
        return record

    def list_blogs(self) -> list[BlogRecord]:
        return list(self.blogs.values())

    def create_project(
        self, title: str, overview: str, image_url: str, file_url: str
    ) -> ProjectRecord:
        record = ProjectRecord(
            title=title, overview=overview, image_url=image_url, file_url=file_url
        )
        self.projects[record.id] = record
        return record

    def list_projects(self) -> list[ProjectRecord]:
        return list(self.projects.values())

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.blogs.clear()
        self.projects.clear()


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    Driver errors are re-raised as StorageError with the original message as detail.
    Tables are created by the first operation that reaches the database.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        try:
            self.engine = create_engine(
                database_url,
                future=True,
                pool_pre_ping=True,
                pool_recycle=1800,
            )
        except SQLAlchemyError as exc:
            raise StorageError("Failed to connect to record store", str(exc)) from exc
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        self._schema_ready = False
        self._schema_lock = threading.Lock()

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self._schema_lock:
            if not self._schema_ready:
                Base.metadata.create_all(self.engine)
                self._schema_ready = True

    @staticmethod
    def _to_blog_record(row: "BlogRow") -> BlogRecord:
        return BlogRecord(
            id=row.id,
            title=row.title,
            content=row.content,
            image_url=row.image_url,
            created_at=row.created_at,
        )

    @staticmethod
    def _to_project_record(row: "ProjectRow") -> ProjectRecord:
        return ProjectRecord(
            id=row.id,
            title=row.title,
            overview=row.overview,
            image_url=row.image_url,
            file_url=row.file_url,
            created_at=row.created_at,
        )

    def create_blog(self, title: str, content: str, image_url: str) -> BlogRecord:
        record = BlogRecord(title=title, content=content, image_url=image_url)
        try:
            self._ensure_schema()
            with self.Session() as session:
                session.add(
                    BlogRow(
                        id=record.id,
                        title=record.title,
                        content=record.content,
                        image_url=record.image_url,
                        created_at=record.created_at,
                    )
                )
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to save blog", str(exc)) from exc
        return record

    def list_blogs(self) -> list[BlogRecord]:
        try:
            self._ensure_schema()
            with self.Session() as session:
                rows = session.execute(
                    select(BlogRow).order_by(BlogRow.created_at.asc())
                ).scalars()
                return [self._to_blog_record(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StorageError("Failed to fetch blogs", str(exc)) from exc

    def create_project(
        self, title: str, overview: str, image_url: str, file_url: str
    ) -> ProjectRecord:
        record = ProjectRecord(
            title=title, overview=overview, image_url=image_url, file_url=file_url
        )
        try:
            self._ensure_schema()
            with self.Session() as session:
                session.add(
                    ProjectRow(
                        id=record.id,
                        title=record.title,
                        overview=record.overview,
                        image_url=record.image_url,
                        file_url=record.file_url,
                        created_at=record.created_at,
                    )
                )
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to save project", str(exc)) from exc
        return record

    def list_projects(self) -> list[ProjectRecord]:
        try:
            self._ensure_schema()
            with self.Session() as session:
                rows = session.execute(
                    select(ProjectRow).order_by(ProjectRow.created_at.asc())
                ).scalars()
                return [self._to_project_record(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StorageError("Failed to fetch projects", str(exc)) from exc


Base = declarative_base()


class BlogRow(Base):
    __tablename__ = "blogs"

    id = Column(String(32), primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column("imageUrl", String, nullable=False)
    created_at = Column(Float, nullable=False, index=True)


class ProjectRow(Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True)
    title = Column(String, nullable=False)
    overview = Column(Text, nullable=False)
    image_url = Column("imageUrl", String, nullable=False)
    file_url = Column("fileUrl", String, nullable=False)
    created_at = Column(Float, nullable=False, index=True)
