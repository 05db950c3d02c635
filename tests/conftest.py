# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stratizen_hub.api.v1.endpoints import resources as resources_endpoints
from stratizen_hub.core.security import create_access_token
from stratizen_hub.db.session import Base
from stratizen_hub.db.session import get_db as app_get_session
from stratizen_hub.db.time import utcnow
from stratizen_hub.main import app as fastapi_app
from stratizen_hub.models import AuthSession, ClassInstance, Resource, ResourceType, Unit, User
from stratizen_hub.schemas.catalog import UnitCreate
from stratizen_hub.schemas.user import UserCreate
from stratizen_hub.services import catalog_service, user_service
from stratizen_hub.services.storage import ObjectStorage

TEST_DB_URL = "sqlite://"

_ADMISSION_COUNTER = count(100001)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def storage(app: FastAPI, tmp_path) -> Iterator[ObjectStorage]:
    """Point uploads at a temporary bucket."""
    test_storage = ObjectStorage(
        root=tmp_path,
        bucket="resources",
        public_base_url="http://files.test",
        max_bytes=1024,
    )
    app.dependency_overrides[resources_endpoints.get_storage_dep] = lambda: test_storage
    try:
        yield test_storage
    finally:
        app.dependency_overrides.pop(resources_endpoints.get_storage_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _build_class_instance(db: Session, label: str) -> ClassInstance:
    program = catalog_service.create_program(db, f"Bachelor of {label}")
    course = catalog_service.create_course(db, program, label)
    year = catalog_service.create_year(db, course, "Year 2")
    semester = catalog_service.create_semester(db, year, "Semester 1")
    group = catalog_service.create_group(db, semester, "Group A")
    return catalog_service.create_class_instance(
        db,
        program=program,
        course=course,
        year=year,
        semester=semester,
        group=group,
    )


@pytest.fixture()
def class_instance(db_session: Session) -> ClassInstance:
    """Class instance shared by the main test users."""
    return _build_class_instance(db_session, "Informatics")


@pytest.fixture()
def other_class_instance(db_session: Session) -> ClassInstance:
    """A second, unrelated class instance."""
    return _build_class_instance(db_session, "Commerce")


@pytest.fixture()
def unit(db_session: Session, class_instance: ClassInstance) -> Unit:
    return catalog_service.create_unit(
        db_session,
        UnitCreate(
            name="Data Structures",
            code="ICS 2105",
            lecturer="Dr. Otieno",
            class_instance_id=class_instance.id,
        ),
    )


@pytest.fixture()
def other_unit(db_session: Session, other_class_instance: ClassInstance) -> Unit:
    return catalog_service.create_unit(
        db_session,
        UnitCreate(
            name="Financial Accounting",
            code="BCM 1102",
            lecturer="Ms. Wanjiku",
            class_instance_id=other_class_instance.id,
        ),
    )


@pytest.fixture()
def make_user(db_session: Session, class_instance: ClassInstance) -> Callable[..., User]:
    """Factory for persisted users; defaults to the main class instance."""

    def _make_user(name: str = "Test User", **overrides: Any) -> User:
        admission = overrides.pop("admission_number", str(next(_ADMISSION_COUNTER)))
        payload = {
            "admission_number": admission,
            "email": f"{admission}@strathmore.edu",
            "name": name,
            "class_instance_id": class_instance.id,
        }
        payload.update(overrides)
        return user_service.create_user(db_session, UserCreate(**payload))

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Primary student."""
    return make_user("Victoria Mutheu")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Second student in the same class."""
    return make_user("Ethan Joseph")


@pytest.fixture()
def admin_user(make_user: Callable[..., User], other_class_instance: ClassInstance) -> User:
    """Unit admin belonging to a different class instance."""
    return make_user("Class Admin", is_admin=True, class_instance_id=other_class_instance.id)


def headers_for(db: Session, user: User) -> dict[str, str]:
    """Open a session for ``user`` without the login bonus and return auth headers."""
    auth_session = AuthSession(user_id=user.id)
    db.add(auth_session)
    db.commit()
    token = create_access_token(user.id, auth_session.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_token(db_session: Session, test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return headers_for(db_session, test_user)


@pytest.fixture()
def other_auth_token(db_session: Session, other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return headers_for(db_session, other_user)


@pytest.fixture()
def admin_auth_token(db_session: Session, admin_user: User) -> dict[str, str]:
    """Return authorization headers for the admin user."""
    return headers_for(db_session, admin_user)


@pytest.fixture()
def make_resource(db_session: Session, unit: Unit) -> Callable[..., Resource]:
    """Factory inserting resources directly, without upload points."""

    def _make_resource(owner: User, resource_type: ResourceType, **overrides: Any) -> Resource:
        values: dict[str, Any] = {
            "title": f"{resource_type.value} resource",
            "description": "",
            "type": resource_type,
            "unit_id": unit.id,
            "user_id": owner.id,
            "file_url": "http://files.test/resources/public/1_doc.pdf",
            "likes": 0,
            "dislikes": 0,
        }
        values.update(overrides)
        resource = Resource(**values)
        db_session.add(resource)
        db_session.commit()
        return resource

    return _make_resource


@pytest.fixture()
def assignment(make_resource: Callable[..., Resource], test_user: User) -> Resource:
    """Assignment owned by the primary user, due in a week."""
    return make_resource(
        test_user,
        ResourceType.ASSIGNMENT,
        title="Linked lists lab",
        file_url=None,
        deadline=utcnow() + timedelta(days=7),
    )


@pytest.fixture()
def note(make_resource: Callable[..., Resource], test_user: User) -> Resource:
    """Note owned by the primary user."""
    return make_resource(test_user, ResourceType.NOTE, title="Week 1 notes")


@pytest.fixture()
def auth_headers_for(db_session: Session) -> Callable[[User], dict[str, str]]:
    """Factory returning auth headers for any persisted user."""

    def _headers(user: User) -> dict[str, str]:
        return headers_for(db_session, user)

    return _headers
