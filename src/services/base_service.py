"""
Base service layer types shared by the products service and its routes
"""

from typing import Dict, Any, List, Optional
from dataclasses import dataclass

# Error types carried by ServiceResult
VALIDATION_ERROR = "VALIDATION_ERROR"
STORE_ERROR = "STORE_ERROR"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    message: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def first(self) -> Optional[Dict[str, Any]]:
        """First record of the result, if any"""
        return self.data[0] if self.data else None

    @classmethod
    def ok(cls, data: List[Dict[str, Any]], message: Optional[str] = None) -> "ServiceResult":
        return cls(success=True, data=data, count=len(data), message=message)

    @classmethod
    def failure(cls, error_type: str, message: str, error: Optional[str] = None) -> "ServiceResult":
        return cls(success=False, message=message, error=error, error_type=error_type)
