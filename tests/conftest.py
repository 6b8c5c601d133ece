from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from barbershop.auth import create_access_token, hash_password
from barbershop.db import get_session, init_db
from barbershop.main import app
from barbershop.models import User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(session: Session, email: str, is_admin: bool) -> User:
    user = User(email=email, password_hash=hash_password("secret123"), full_name=email.split("@")[0], is_admin=is_admin)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin_user(session):
    return _make_user(session, "owner@barbershop.test", is_admin=True)


@pytest.fixture
def client_user(session):
    return _make_user(session, "joao@example.com", is_admin=False)


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': admin_user.email})}"}


@pytest.fixture
def client_headers(client_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': client_user.email})}"}


@pytest.fixture
def barber(client, admin_headers):
    response = client.post("/barbers", json={"name": "Carlos", "bio": "Fades"}, headers=admin_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def haircut(client, admin_headers):
    response = client.post(
        "/services",
        json={"name": "Haircut", "duration_minutes": 30, "price": 35.0},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def cut_and_beard(client, admin_headers):
    response = client.post(
        "/services",
        json={"name": "Cut and beard", "duration_minutes": 60, "price": 55.0},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def monday():
    """A Monday far enough ahead that timezone differences never make it 'today'."""
    today = date.today()
    days = (7 - today.weekday()) % 7
    if days < 2:
        days += 7
    return today + timedelta(days=days)
