"""Job-file schema validation."""

from .validator import validate_job

__all__ = ["validate_job"]
