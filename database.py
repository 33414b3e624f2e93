# =============================================================================
# 🗄️ database.py
# -----------------------------------------------------------------------------
# SQLAlchemy-Datenbankkonfiguration für den Site Builder
# DATABASE_URL hat Vorrang, sonst MySQL (PyMySQL) aus den MYSQL_*-Variablen
# =============================================================================

import os
from urllib.parse import quote_plus

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# 🔹 .env laden
load_dotenv()


def _build_database_url() -> str:
    explicit = os.getenv("DATABASE_URL", "").strip()
    if explicit:
        return explicit

    user = os.getenv("MYSQL_USER", "root")
    password = quote_plus(os.getenv("MYSQL_PASS", ""))
    host = os.getenv("MYSQL_HOST", "localhost")
    port = os.getenv("MYSQL_PORT", "3306")
    name = os.getenv("MYSQL_DB", "site_builder")
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}?charset=utf8mb4"


SQLALCHEMY_DATABASE_URL = _build_database_url()

# pool_pre_ping = erkennt unterbrochene Verbindungen
# pool_recycle = hält MySQL-Verbindungen frisch
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=280,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    """
    Erstellt eine neue Datenbank-Session pro Anfrage und schließt sie automatisch.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
