"""ORM Models for the boiler quote catalog and saved quotes — SQLAlchemy 2.0"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from boilerquote.db import Base

# JSONB on PostgreSQL, plain JSON elsewhere
_JSON = JSON().with_variant(JSONB(), "postgresql")


def gen_uuid():
    return str(uuid.uuid4())


# ── CATALOG ───────────────────────────────────────────────────────────────────
class BoilerRow(Base):
    __tablename__ = "boilers"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(200), nullable=False)
    boiler_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # Combi | System | Regular
    tier: Mapped[str] = mapped_column(String(20), nullable=False)                     # Budget | Mid-Range | Premium
    dhw_kw: Mapped[float] = mapped_column(Numeric(5, 1), nullable=False)
    supply_price: Mapped[int] = mapped_column(Integer, nullable=False)                # pence ex VAT
    warranty_years: Mapped[int] = mapped_column(Integer, default=10)
    flow_rate_lpm: Mapped[Optional[float]] = mapped_column(Numeric(5, 1))
    efficiency_rating: Mapped[str] = mapped_column(String(5), default="A")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class LabourCostRow(Base):
    __tablename__ = "labour_costs"
    __table_args__ = (UniqueConstraint("job_type", "tier", name="uq_labour_job_tier"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_type: Mapped[str] = mapped_column(String(100), nullable=False)
    tier: Mapped[str] = mapped_column(String(20), nullable=False)                     # Standard | Premium
    price: Mapped[int] = mapped_column(Integer, nullable=False)


class SundryRow(Base):
    __tablename__ = "sundries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[int] = mapped_column(Integer, nullable=False)


class LocationRow(Base):
    __tablename__ = "locations"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    postcode_pattern: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    area_name: Mapped[Optional[str]] = mapped_column(String(100))
    price_multiplier: Mapped[float] = mapped_column(Numeric(4, 2), nullable=False, default=1.0)


# ── SAVED QUOTES ──────────────────────────────────────────────────────────────
class SavedQuote(Base):
    __tablename__ = "quotes"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    fingerprint: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    postcode: Mapped[Optional[str]] = mapped_column(String(10))
    selected_tier: Mapped[str] = mapped_column(String(20), default="Standard")
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    catalog_status: Mapped[str] = mapped_column(String(20), default="ok")
    profile_json: Mapped[dict] = mapped_column(_JSON, nullable=False)
    result_json: Mapped[dict] = mapped_column(_JSON, nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255))
    customer_email: Mapped[Optional[str]] = mapped_column(String(255))
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
