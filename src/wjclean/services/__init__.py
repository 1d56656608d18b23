from .file_service import FileService
from .cleanup_service import DuplicateService, OrphanService

__all__ = ["FileService", "DuplicateService", "OrphanService"]
