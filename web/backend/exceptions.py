#!/usr/bin/env python3
"""
Error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.matching.exceptions import (
    MatchingError,
    InputError,
    NoActiveUsersError,
    MatchNotFoundError,
    RequirementNotFoundError,
    ValidationConflictError,
    PermissionDeniedError,
    CalculationCancelledError,
)

logger = logging.getLogger(__name__)


def status_code_for(exc: MatchingError) -> int:
    if isinstance(exc, (MatchNotFoundError, RequirementNotFoundError)):
        return 404
    if isinstance(exc, InputError):
        return 400
    if isinstance(exc, PermissionDeniedError):
        return 403
    if isinstance(exc, (ValidationConflictError, CalculationCancelledError)):
        return 409
    if isinstance(exc, NoActiveUsersError):
        return 422
    return 500


async def matching_exception_handler(
    request: Request,
    exc: MatchingError
) -> JSONResponse:
    """
    Handle matching engine errors.
    
    Args:
        request: The FastAPI request.
        exc: The matching error.
    
    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Matching error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.kind} in {request.url.path}: {exc}")
    
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": exc.message,
            "kind": exc.kind,
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    
    Args:
        request: The FastAPI request.
        exc: The HTTP exception.
    
    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    
    Args:
        request: The FastAPI request.
        exc: The exception.
    
    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
