"""Error models"""

from enum import Enum
from typing import Optional
import uuid


class ErrorCode(str, Enum):
    """Error codes surfaced to callers"""
    INVALID_REQUEST = "INVALID_REQUEST"
    GENERATION_FAILED = "GENERATION_FAILED"
    INVALID_CONTENT_FORMAT = "INVALID_CONTENT_FORMAT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ApplicationError(Exception):
    """Top-level pipeline error; a request that raises one never yields a bundle"""
    def __init__(self, code: ErrorCode, message: str, retryable: bool = False, hint: Optional[str] = None):
        self.error_id = str(uuid.uuid4())
        self.code = code
        self.message = message
        self.retryable = retryable
        self.hint = hint
        super().__init__(self.message)

    def model_dump(self):
        """Return dict representation for API responses"""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "message": self.message,
            "hint": self.hint,
            "retryable": self.retryable,
        }

    @property
    def http_status(self) -> int:
        """Map error code to HTTP status"""
        mapping = {
            ErrorCode.INVALID_REQUEST: 400,
            ErrorCode.GENERATION_FAILED: 502,
            ErrorCode.INVALID_CONTENT_FORMAT: 502,
            ErrorCode.CONFIGURATION_ERROR: 500,
        }
        return mapping.get(self.code, 500)


class ImageLookupError(Exception):
    """Image search failed for one directive; never fatal to the bundle"""
    pass
