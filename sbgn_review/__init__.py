"""Review tool for paired SBGN diagram renderings."""

from .config import ReviewConfig, load_config
from .documents import get_document, save_document
from .errors import (
    ConfigurationError,
    NotFoundError,
    ReviewError,
    StorageError,
    ValidationError,
)
from .images import ImagePayload, downscale_image, load_image
from .io import list_working_set, reconcile_basenames, validate_identifier
from .ledger import StatusLedger, WorkItem, open_ledger
from .web import create_app

__all__ = [
    "ReviewConfig",
    "load_config",
    "get_document",
    "save_document",
    "ConfigurationError",
    "NotFoundError",
    "ReviewError",
    "StorageError",
    "ValidationError",
    "ImagePayload",
    "downscale_image",
    "load_image",
    "list_working_set",
    "reconcile_basenames",
    "validate_identifier",
    "StatusLedger",
    "WorkItem",
    "open_ledger",
    "create_app",
]
