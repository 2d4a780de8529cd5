"""
Domain models for the EFIHUB client.
"""

from efihub.models.sso import SSOUser
from efihub.models.upload import FileContents, FilePart, FilePath, FileSpec

__all__ = [
    "FileContents",
    "FilePart",
    "FilePath",
    "FileSpec",
    "SSOUser",
]
