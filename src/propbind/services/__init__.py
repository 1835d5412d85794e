"""Service layer shared by the CLI and embedding applications."""

from propbind.services.config import ConfigService
from propbind.services.result import ServiceError, ServiceResult

__all__ = ["ConfigService", "ServiceError", "ServiceResult"]
