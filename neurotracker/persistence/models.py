# neurotracker/persistence/models.py
# -*- coding: utf-8 -*-
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Text, DateTime, func
import datetime as dt

class Base(DeclarativeBase):
    pass

class KVEntry(Base):
    """Une clé -> une valeur JSON (équivalent du localStorage du navigateur)."""
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, default=func.now(), onupdate=func.now(), nullable=False
    )
