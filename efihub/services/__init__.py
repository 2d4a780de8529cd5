"""
Per-domain EFIHUB services.
"""

from efihub.services.sso import SSOService
from efihub.services.storage import StorageService
from efihub.services.websocket import WebsocketService
from efihub.services.whatsapp import WhatsappService

__all__ = [
    "SSOService",
    "StorageService",
    "WebsocketService",
    "WhatsappService",
]
