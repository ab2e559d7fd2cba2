import math
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobboard.database import get_db, init_db
from jobboard.dependencies import get_city_index
from jobboard.main import app
from jobboard.models.installer import Installer, InstallerSpecialty
from jobboard.models.job import Job, JobTrade
from jobboard.services.city_index import CityCoordinate, CityIndex
from jobboard.services.geo_service import EARTH_RADIUS_MILES

AUSTIN = CityCoordinate("Austin", "TX", 30.2672, -97.7431)
MILES_PER_DEGREE_LAT = EARTH_RADIUS_MILES * math.pi / 180


def north_of(origin: CityCoordinate, city: str, miles: float) -> CityCoordinate:
    """A point due north of origin, exactly `miles` away along the meridian."""
    return CityCoordinate(city, origin.state, origin.lat + miles / MILES_PER_DEGREE_LAT, origin.lng)


CITY_RECORDS = [
    AUSTIN,
    CityCoordinate("Round Rock", "TX", 30.5083, -97.6789),
    CityCoordinate("San Antonio", "TX", 29.4241, -98.4936),
    CityCoordinate("Houston", "TX", 29.7604, -95.3698),
    CityCoordinate("Dallas", "TX", 32.7767, -96.7970),
    CityCoordinate("St. Louis", "MO", 38.6270, -90.1994),
    CityCoordinate("Springfield", "MO", 37.2090, -93.2923),
    CityCoordinate("Springfield", "IL", 39.7817, -89.6501),
    north_of(AUSTIN, "Fortynine North", 49.9),
    north_of(AUSTIN, "Fiftyone North", 51.0),
]


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def city_index():
    return CityIndex(CITY_RECORDS)


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "jobboard.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def client(test_db, city_index):
    app.dependency_overrides[get_city_index] = lambda: city_index
    return TestClient(app)


@pytest.fixture
def make_job(db):
    counter = {"n": 0}

    def _make(**overrides) -> Job:
        counter["n"] += 1
        n = counter["n"]
        trades = overrides.pop("trades", ["vinyl wrap"])
        fields = {
            "id": str(uuid.uuid4()),
            "slug": f"job-{n}",
            "title": f"Installer {n}",
            "company_name": "Wrap Co",
            "company_email": "hiring@wrap.example",
            "location_city": "Austin",
            "location_state": "TX",
            "job_type": "full-time",
            "pay_min": None,
            "pay_max": None,
            "pay_type": "hourly",
            "description": "Install vinyl wraps on fleet vehicles.",
            "is_featured": False,
            "status": "active",
            "manage_token_hash": "unused",
            # Distinct, increasing timestamps so "newest" order is predictable.
            "created_at": f"2026-01-01T00:{n // 60:02d}:{n % 60:02d}Z",
            "updated_at": "2026-01-01T00:00:00Z",
        }
        fields.update(overrides)
        job = Job(**fields, trades=[JobTrade(trade=t) for t in trades])
        db.add(job)
        db.commit()
        return job

    return _make


@pytest.fixture
def make_installer(db):
    counter = {"n": 0}

    def _make(**overrides) -> Installer:
        counter["n"] += 1
        n = counter["n"]
        specialties = overrides.pop("specialties", ["window tint"])
        fields = {
            "id": str(uuid.uuid4()),
            "name": f"Installer {n}",
            "bio": "Ten years of tint and PPF work.",
            "location_city": "Austin",
            "location_state": "TX",
            "years_experience": None,
            "is_available": True,
            "manage_token_hash": "unused",
            "created_at": f"2026-01-01T00:{n // 60:02d}:{n % 60:02d}Z",
            "updated_at": "2026-01-01T00:00:00Z",
        }
        fields.update(overrides)
        installer = Installer(
            **fields, specialties=[InstallerSpecialty(specialty=s) for s in specialties]
        )
        db.add(installer)
        db.commit()
        return installer

    return _make
