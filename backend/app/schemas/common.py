"""
Response envelope shared by every endpoint
"""
from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """{success, data?, error?} wrapper returned to the dashboard"""
    success: bool = True
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message)
