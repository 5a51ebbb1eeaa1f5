"""Candidate sources supplying VAR records to the engine."""

from .base import CandidateSource
from .database import DatabaseSource
from .static import StaticSource, sample_vars

__all__ = ["CandidateSource", "DatabaseSource", "StaticSource", "sample_vars"]
