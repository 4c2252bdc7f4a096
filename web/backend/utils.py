#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from typing import Optional, Any
from datetime import datetime

from fastapi import HTTPException


def safe_int(value: Optional[Any], default: int = 0) -> int:
    """
    Safely convert value to int.
    
    Args:
        value: Value to convert.
        default: Default value if conversion fails or value is None.
    
    Returns:
        Integer value.
    """
    if value is None:
        return default
    
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def safe_str(value: Optional[Any], default: Optional[str] = "") -> Optional[str]:
    """
    Safely convert value to string.
    
    Args:
        value: Value to convert.
        default: Default value if value is None.
    
    Returns:
        String value.
    """
    if value is None:
        return default
    return str(value)


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.
    
    Args:
        dt: Datetime object.
    
    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def parse_uuid(value: str, name: str = "id") -> uuid.UUID:
    """Parse a path/header value as a UUID or fail with HTTP 400."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {name} format: {value}. Must be a valid UUID."
        )
