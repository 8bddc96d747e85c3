"""Status rules for a property-rental platform."""

from rental_status.results import ErrorKind, OperationResult

__version__ = "0.1.0"

__all__ = ["ErrorKind", "OperationResult", "__version__"]
