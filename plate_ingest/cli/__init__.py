from __future__ import annotations

from .__main__ import EXIT_FATAL, EXIT_SUCCESS, EXIT_VALIDATION_FAILURE, main

__all__ = [
    "EXIT_FATAL",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_FAILURE",
    "main",
]
