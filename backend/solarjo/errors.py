"""
Error kinds raised by the SolarJo engines.

Calculators raise ``InvalidInput`` and ``SizeUnavailable``; the external
service clients raise ``ExternalServiceFailure``; the project store raises
``PersistenceFailure`` and ``ProjectNotFound``. API routes translate them into
HTTP status codes.
"""

from typing import Optional


class InvalidInput(ValueError):
    """A numeric parameter is missing or outside its allowed range."""


class SizeUnavailable(ValueError):
    """No standard conductor keeps the voltage drop within the allowed limit."""

    def __init__(self, message: str, required_area_mm2: Optional[float] = None):
        super().__init__(message)
        self.required_area_mm2 = required_area_mm2


class ExternalServiceFailure(RuntimeError):
    """A weather or explanation service was unreachable or returned garbage."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class PersistenceFailure(RuntimeError):
    """Saving, listing or deleting a project failed."""


class ProjectNotFound(LookupError):
    """The requested project does not exist for this owner."""
