"""Exception types raised by the scoring, explanation and scenario engine."""


class EngineError(Exception):
    """Base class for engine errors."""


class EngineValidationError(EngineError, ValueError):
    """Input was rejected. Never silently corrected."""


class UnknownCandidateError(EngineValidationError, LookupError):
    """A referenced candidate id does not exist in the candidate set."""

    def __init__(self, missing_ids):
        self.missing_ids = list(missing_ids)
        ids = ", ".join(str(i) for i in self.missing_ids)
        super().__init__(f"Unknown VAR id(s): {ids}")


class EmptySelectionError(EngineValidationError):
    """A selection of targets was empty."""


class ScenarioError(EngineValidationError):
    """Deal inputs cannot produce a meaningful projection."""


class ScoreIntegrityError(EngineError, ArithmeticError):
    """A score computation produced NaN or infinity."""
