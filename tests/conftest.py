"""Shared fixtures: an in-memory SQLite database and a repository on top of it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before app.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_BACKEND", "sql")

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import create_tables
from app.models.operator import Operator
from app.repositories.sql import SqlYardRepository
from app.schemas.vehicle import VehicleOut


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    session.add(Operator(id="op-1", name="Sam Gate"))
    session.commit()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def repo(db_session):
    return SqlYardRepository(db_session)


def make_vehicle(**overrides) -> VehicleOut:
    values = dict(
        id="veh-1",
        registration="AB12CDE",
        po_ref="PO-100",
        pager_number="07000000000",
        mobile_number=None,
        quoted_minutes=30,
        status="parked",
        check_in_time=datetime(2026, 10, 19, 9, 0),
        operator_id="op-1",
        classification="normal",
    )
    values.update(overrides)
    return VehicleOut(**values)
