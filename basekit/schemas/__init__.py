"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by every basekit module.
"""

from .errors import (
    BasekitError,
    BasekitException,
    BoundsExceededException,
    ConfigurationException,
    EngineStateException,
    ErrorCodes,
    MalformedInputException,
    UnsupportedAlgorithmException,
    ValueRangeException,
)

__all__ = [
    "ErrorCodes",
    "BasekitError",
    "BasekitException",
    "BoundsExceededException",
    "ValueRangeException",
    "MalformedInputException",
    "EngineStateException",
    "UnsupportedAlgorithmException",
    "ConfigurationException",
]
