"""
Test configuration and fixtures
"""
import os
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Set testing environment before the app is imported
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['SUPABASE_URL'] = ''
os.environ['SUPABASE_KEY'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'

from app.main import app
from app.database import Base, SessionLocal, engine
from app.models import models
from mocks.mock_supabase import MockSupabaseClient

fake = Faker()


@pytest.fixture(scope='function')
def db_session() -> Generator[Session, None, None]:
    """Fresh in-memory schema for each test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def supabase() -> MockSupabaseClient:
    return MockSupabaseClient()


@pytest.fixture
def client(db_session: Session, supabase: MockSupabaseClient) -> Generator[TestClient, None, None]:
    app.state.supabase = supabase
    with TestClient(app) as c:
        yield c
    app.state.supabase = None


def _make_user(db_session: Session, supabase: MockSupabaseClient, role: str, **profile_fields):
    user, token = supabase.auth.add_user(fake.unique.email())
    profile = models.Profile(id=user.id, full_name=fake.name(), role=role, **profile_fields)
    db_session.add(profile)
    db_session.commit()
    return user, token


@pytest.fixture
def student(db_session, supabase):
    """(user, token) for a student without branch/semester defaults"""
    return _make_user(db_session, supabase, 'student')


@pytest.fixture
def admin(db_session, supabase):
    return _make_user(db_session, supabase, 'admin')


@pytest.fixture
def student_client(client: TestClient, student) -> TestClient:
    client.cookies.set('access_token', student[1])
    return client


@pytest.fixture
def admin_client(client: TestClient, admin) -> TestClient:
    client.cookies.set('access_token', admin[1])
    return client


@pytest.fixture
def make_resource(db_session: Session):
    def _make(**fields) -> models.Resource:
        data = {
            'title': fake.sentence(nb_words=3),
            'branch': 'Computer Science',
            'semester': 1,
            'subject_code': 'CS101',
            'type': 'Notes',
            'file_url': f'https://project.supabase.co/storage/v1/object/public/eng-docs/{fake.uuid4()}.pdf',
        }
        data.update(fields)
        resource = models.Resource(**data)
        db_session.add(resource)
        db_session.commit()
        db_session.refresh(resource)
        return resource
    return _make


@pytest.fixture
def make_folder(db_session: Session):
    def _make(name: str, parent=None, **fields) -> models.Folder:
        folder = models.Folder(name=name, parent_id=parent.id if parent is not None else None, **fields)
        db_session.add(folder)
        db_session.commit()
        db_session.refresh(folder)
        return folder
    return _make
