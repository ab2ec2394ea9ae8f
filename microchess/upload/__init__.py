"""
Upload of the game log to an external bin-storage endpoint.
"""

from .jsonbin import DEDUPE_KEY, UploadJob, dedupe_by_final_position

__all__ = [
    "DEDUPE_KEY",
    "UploadJob",
    "dedupe_by_final_position",
]
