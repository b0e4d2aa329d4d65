import os
import tempfile
from datetime import datetime

import pytest

# Settings are read at import time, so the environment goes first
_DB_FILE = os.path.join(tempfile.mkdtemp(prefix="tickets-movil-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_FILE}"
os.environ["ENVIRONMENT"] = "development"
os.environ["CLASSIFIER_API_KEY"] = ""
os.environ["MOCK_LLM"] = "false"
os.environ["DB_CREATE_TABLES"] = "false"
for _name in ("GRAFANA_HOST", "GRAFANA_API_KEY", "GRAFANA_INSTANCE_ID"):
    os.environ.pop(_name, None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, select  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from src.main import app  # noqa: E402
from src.infrastructure.database import Base  # noqa: E402
from src.accounts.infrastructure.models import UserModel  # noqa: E402
from src.accounts.infrastructure.passwords import hash_password  # noqa: E402
from src.tickets.infrastructure.models import AreaModel, TicketModel  # noqa: E402
from src.evaluations.infrastructure.models import EvaluationModel  # noqa: E402

sync_engine = create_engine(f"sqlite:///{_DB_FILE}")


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(sync_engine)
    yield
    Base.metadata.drop_all(sync_engine)


@pytest.fixture()
def client():
    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_area():
    def _make(name="Sistemas"):
        with Session(sync_engine) as session:
            area = AreaModel(name=name)
            session.add(area)
            session.commit()
            return area.id
    return _make


@pytest.fixture()
def make_user():
    def _make(username="jperez", password="secreta", hashed=True, active=True, area_id=None,
              first_name="Juan", last_name="Pérez", role_id=2):
        stored = hash_password(password) if hashed else password
        with Session(sync_engine) as session:
            user = UserModel(
                username=username,
                password=stored,
                first_name=first_name,
                last_name=last_name,
                email=f"{username}@example.com",
                role_id=role_id,
                area_id=area_id,
                active=active,
            )
            session.add(user)
            session.commit()
            return user.id
    return _make


@pytest.fixture()
def make_ticket():
    def _make(user_id, area_id=1, title="Impresora", description="No imprime",
              status="En proceso", priority="Media", technician_id=None, created_at=None):
        with Session(sync_engine) as session:
            ticket = TicketModel(
                user_id=user_id,
                area_id=area_id,
                technician_id=technician_id,
                title=title,
                description=description,
                status=status,
                priority=priority,
                created_at=created_at or datetime(2024, 5, 1, 9, 0, 0),
            )
            session.add(ticket)
            session.commit()
            return ticket.id
    return _make


@pytest.fixture()
def fetch_ticket():
    def _fetch(ticket_id):
        with Session(sync_engine) as session:
            return session.get(TicketModel, ticket_id)
    return _fetch


@pytest.fixture()
def fetch_user():
    def _fetch(user_id):
        with Session(sync_engine) as session:
            return session.get(UserModel, user_id)
    return _fetch


@pytest.fixture()
def fetch_evaluations():
    def _fetch(ticket_id):
        with Session(sync_engine) as session:
            stmt = select(EvaluationModel).where(EvaluationModel.ticket_id == ticket_id)
            return list(session.scalars(stmt).all())
    return _fetch
