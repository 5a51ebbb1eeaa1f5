"""FastAPI application backed by the VAR database."""

from ma_engine.models.database import init_db
from ma_engine.service import MaEngine
from ma_engine.sources import DatabaseSource
from .app import create_app

# Initialize database
SessionLocal = init_db()

# Create FastAPI app
app = create_app(MaEngine(DatabaseSource(SessionLocal)))
