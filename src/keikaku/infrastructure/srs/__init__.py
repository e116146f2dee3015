# Infrastructure SRS Adapters Package
from .fsrs_service import FsrsSrsService

__all__ = ["FsrsSrsService"]
