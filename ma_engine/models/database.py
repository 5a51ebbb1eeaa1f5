"""SQLAlchemy database models and setup."""

import json
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    Text,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker

from ma_engine.config import settings
from .candidate import UnifiedVar

Base = declarative_base()


class DBVar(Base):
    """Stored VAR record."""

    __tablename__ = "vars"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    website = Column(String(500))

    # Location
    hq_city = Column(String(100))
    hq_state = Column(String(50))
    branch_locations = Column(Text)  # JSON array of {city, state}

    # Financials
    annual_revenue = Column(Float)
    ebitda_margin = Column(Float)
    growth_rate = Column(Float)

    # Organization
    employee_count = Column(Integer)
    ownership_type = Column(String(50))
    glassdoor_rating = Column(Float)
    year_founded = Column(Integer)

    # Go-to-market
    specialties = Column(Text)  # JSON array
    top_vendors = Column(Text)  # JSON array
    top_customers = Column(Text)  # JSON array
    customer_segment = Column(String(50))
    certifications = Column(Text)  # JSON array

    # Descriptive
    strategic_specialty = Column(Text)
    description = Column(Text)
    data_sources = Column(Text)  # JSON array
    confidence_score = Column(Float, default=0.5)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_var_state", "hq_state"),
    )

    def to_unified(self) -> UnifiedVar:
        """Map the stored row onto the read-only candidate record."""
        return UnifiedVar(
            id=self.id,
            name=self.name,
            website=self.website,
            hq_city=self.hq_city or "",
            hq_state=self.hq_state or "",
            branch_locations=_loads(self.branch_locations),
            annual_revenue=self.annual_revenue,
            ebitda_margin=self.ebitda_margin,
            growth_rate=self.growth_rate,
            employee_count=self.employee_count,
            ownership_type=self.ownership_type or None,
            glassdoor_rating=self.glassdoor_rating,
            year_founded=self.year_founded,
            specialties=_loads(self.specialties),
            top_vendors=_loads(self.top_vendors),
            top_customers=_loads(self.top_customers),
            customer_segment=self.customer_segment or None,
            certifications=_loads(self.certifications),
            strategic_specialty=self.strategic_specialty,
            description=self.description or "",
            data_sources=_loads(self.data_sources),
            confidence_score=self.confidence_score if self.confidence_score is not None else 0.5,
        )

    @classmethod
    def from_unified(cls, var: UnifiedVar) -> "DBVar":
        return cls(
            id=var.id,
            name=var.name,
            website=var.website,
            hq_city=var.hq_city,
            hq_state=var.hq_state,
            branch_locations=json.dumps([b.model_dump() for b in var.branch_locations]),
            annual_revenue=var.annual_revenue,
            ebitda_margin=var.ebitda_margin,
            growth_rate=var.growth_rate,
            employee_count=var.employee_count,
            ownership_type=var.ownership_type,
            glassdoor_rating=var.glassdoor_rating,
            year_founded=var.year_founded,
            specialties=json.dumps(var.specialties),
            top_vendors=json.dumps(var.top_vendors),
            top_customers=json.dumps(var.top_customers),
            customer_segment=var.customer_segment,
            certifications=json.dumps(var.certifications),
            strategic_specialty=var.strategic_specialty,
            description=var.description,
            data_sources=json.dumps(var.data_sources),
            confidence_score=var.confidence_score,
        )


def _loads(value: Optional[str]) -> list:
    return json.loads(value) if value else []


# Database initialization
def init_db(db_url: Optional[str] = None) -> sessionmaker:
    """Initialize database and return session maker."""
    if db_url is None:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    url = db_url or settings.database_url
    engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
