"""
Decorators for FastAPI endpoint error handling.

This module provides a decorator that maps converter errors onto HTTP
responses so every geometry endpoint reports failures the same way.
"""

import logging
from functools import wraps
from typing import Callable

from fastapi import HTTPException

from utils.validation import GeometryInputError

logger = logging.getLogger(__name__)


def handle_geometry_request(func: Callable) -> Callable:
    """
    Decorator to handle common converter endpoint patterns:
    - Input validation errors -> 400
    - Unexpected errors -> 500 with full traceback logged
    - HTTPException raised by the endpoint passes through untouched
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            # Re-raise HTTP exceptions as-is
            raise
        except GeometryInputError as e:
            logger.warning(f"Invalid geometry input in {func.__name__}: {e}")
            raise HTTPException(
                status_code=400,
                detail=f"Invalid geometry input: {str(e)}"
            )
        except ValueError as e:
            logger.warning(f"Invalid value in {func.__name__}: {e}")
            raise HTTPException(
                status_code=400,
                detail=str(e)
            )
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}")
            logger.exception("Full exception details:")
            raise HTTPException(
                status_code=500,
                detail=f"Internal server error during conversion: {str(e)}"
            )

    return wrapper
