import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobboard.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id                TEXT PRIMARY KEY,
    slug              TEXT NOT NULL UNIQUE,
    title             TEXT NOT NULL,
    company_name      TEXT NOT NULL,
    company_email     TEXT NOT NULL,
    company_logo_url  TEXT,
    location_city     TEXT NOT NULL,
    location_state    TEXT NOT NULL,
    job_type          TEXT NOT NULL
                      CHECK(job_type IN ('full-time','part-time','contract','gig')),
    pay_min           INTEGER,
    pay_max           INTEGER,
    pay_type          TEXT CHECK(pay_type IN ('hourly','salary','per-job')),
    description       TEXT NOT NULL,
    requirements      TEXT,
    how_to_apply      TEXT,
    is_featured       INTEGER NOT NULL DEFAULT 0,
    status            TEXT NOT NULL DEFAULT 'active'
                      CHECK(status IN ('active','inactive','closed')),
    manage_token_hash TEXT NOT NULL,
    expires_at        TEXT,
    created_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_jobs_status ON jobs(status);
CREATE INDEX IF NOT EXISTS idx_jobs_created ON jobs(created_at);
CREATE INDEX IF NOT EXISTS idx_jobs_pay ON jobs(pay_max, pay_min);
CREATE INDEX IF NOT EXISTS idx_jobs_location ON jobs(location_state, location_city);

CREATE TABLE IF NOT EXISTS job_trades (
    job_id TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    trade  TEXT NOT NULL,
    PRIMARY KEY (job_id, trade)
);

CREATE INDEX IF NOT EXISTS idx_job_trades_trade ON job_trades(trade);

-- ============================================================
-- INSTALLERS
-- ============================================================
CREATE TABLE IF NOT EXISTS installers (
    id                TEXT PRIMARY KEY,
    name              TEXT NOT NULL,
    bio               TEXT NOT NULL,
    location_city     TEXT NOT NULL,
    location_state    TEXT NOT NULL,
    years_experience  INTEGER,
    is_available      INTEGER NOT NULL DEFAULT 1,
    avatar_url        TEXT,
    manage_token_hash TEXT NOT NULL,
    created_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_installers_created ON installers(created_at);
CREATE INDEX IF NOT EXISTS idx_installers_location ON installers(location_state, location_city);

CREATE TABLE IF NOT EXISTS installer_specialties (
    installer_id TEXT NOT NULL REFERENCES installers(id) ON DELETE CASCADE,
    specialty    TEXT NOT NULL,
    PRIMARY KEY (installer_id, specialty)
);

CREATE INDEX IF NOT EXISTS idx_installer_specialties ON installer_specialties(specialty);

-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS applications (
    id          TEXT PRIMARY KEY,
    job_id      TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    name        TEXT NOT NULL,
    email       TEXT NOT NULL,
    phone       TEXT,
    message     TEXT NOT NULL,
    resume_url  TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_applications_job ON applications(job_id);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
