# File: lifeplanner/models/api.py
"""
Data models for persistence API responses.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ApiResponse:
    """Outcome of one call to the planner API."""
    status: str  # "success" or "fail"
    data: Any = None
    message: Optional[str] = None
    status_code: Optional[int] = None

    def is_success(self) -> bool:
        """Check if response was successful."""
        return self.status == "success"

    @classmethod
    def ok(cls, data: Any = None, status_code: Optional[int] = None) -> 'ApiResponse':
        return cls(status="success", data=data, status_code=status_code)

    @classmethod
    def fail(cls, message: str, status_code: Optional[int] = None) -> 'ApiResponse':
        return cls(status="fail", message=message, status_code=status_code)
