from typing import Dict, List, Optional


class PipelineError(Exception):
    """Base class for errors raised by the maintenance analytics pipeline."""


class MaintenanceValidationError(PipelineError):
    """Required input is missing or malformed; raised before any stage runs."""

    def __init__(self, message: str, fields: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class ComputationError(PipelineError):
    """Arithmetic over the supplied inputs failed; the whole run is aborted."""
