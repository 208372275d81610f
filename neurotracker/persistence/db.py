# neurotracker/persistence/db.py
# -*- coding: utf-8 -*-
import logging
import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)

# Lu ici (et non dans config.py) : les tests rechargent ce module après avoir posé DB_URL
DB_URL = os.getenv("DB_URL", "sqlite:///neurotracker.db")
DB_ECHO = os.getenv("DB_ECHO", "").strip().lower() in {"1", "true", "yes", "on"}


def _connect_args(url: str) -> dict:
    # Streamlit exécute chaque rerun dans un thread différent
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(DB_URL, echo=DB_ECHO, future=True, connect_args=_connect_args(DB_URL))

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,  # les entrées lues restent utilisables hors session
    future=True,
)


@contextmanager
def get_session() -> Iterator[Session]:
    """Session transactionnelle : commit en sortie, rollback (puis relance) en cas d'erreur."""
    s = SessionLocal()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        logger.exception("Transaction annulée")
        raise
    finally:
        s.close()


def init_db(Base, drop_and_recreate=False):
    """Crée la table clé/valeur (et la recrée si demandé)."""
    if drop_and_recreate:
        logger.warning("Suppression des tables existantes (%s)", engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
