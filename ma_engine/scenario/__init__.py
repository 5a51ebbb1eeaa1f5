"""Acquisition scenario simulation."""

from .simulator import ScenarioSimulator

__all__ = ["ScenarioSimulator"]
