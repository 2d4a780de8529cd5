"""
EFIHUB API client layer.

Provides authenticated HTTP communication with the EFIHUB API.
"""

from efihub.api.http_client import HttpClient, join_url, sanitize_for_log
from efihub.api.multipart import resolve_file_spec, resolve_files
from efihub.api.oauth import fetch_access_token

__all__ = [
    "HttpClient",
    "fetch_access_token",
    "join_url",
    "resolve_file_spec",
    "resolve_files",
    "sanitize_for_log",
]
