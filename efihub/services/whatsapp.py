"""
WhatsApp messaging service for EFIHUB.

Base path: /whatsapp
"""

import httpx
import structlog

from efihub.api.http_client import HttpClient
from efihub.models.upload import FileSpec

logger = structlog.get_logger(__name__)

SEND_MESSAGE_ENDPOINT = "/whatsapp/send_message"
SEND_GROUP_MESSAGE_ENDPOINT = "/whatsapp/group/send_message"
SEND_ATTACHMENT_ENDPOINT = "/whatsapp/send_message_with_attachment"
SEND_GROUP_ATTACHMENT_ENDPOINT = "/whatsapp/group/send_message_with_attachment"


class WhatsappService:
    """
    Sends WhatsApp messages to individuals and groups.

    Every method reports HTTP-level success only; the response body is not
    inspected.
    """

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def send_message(
        self,
        sender: str,
        to: str,
        message: str,
        ref_id: str | None = None,
        ref_url: str | None = None,
    ) -> bool:
        """
        Send a text message.

        Args:
            sender: Sender phone number.
            to: Recipient phone number.
            message: Text content.
            ref_id: Optional reference ID.
            ref_url: Optional reference URL.
        """
        return self._send_text(SEND_MESSAGE_ENDPOINT, sender, to, message, ref_id, ref_url)

    def send_group_message(
        self,
        sender: str,
        to: str,
        message: str,
        ref_id: str | None = None,
        ref_url: str | None = None,
    ) -> bool:
        """Send a text message to a group. ``to`` is the group ID."""
        return self._send_text(SEND_GROUP_MESSAGE_ENDPOINT, sender, to, message, ref_id, ref_url)

    def send_attachment(self, sender: str, to: str, message: str, attachment: FileSpec) -> bool:
        """
        Send a message with an attached file.

        Raises:
            FileNotReadableError: If the attachment path cannot be opened.
            InvalidFileSpecificationError: If ``attachment`` has an unknown shape.
        """
        return self._send_attachment(SEND_ATTACHMENT_ENDPOINT, sender, to, message, attachment)

    def send_group_attachment(
        self, sender: str, to: str, message: str, attachment: FileSpec
    ) -> bool:
        """Send a message with an attached file to a group."""
        return self._send_attachment(
            SEND_GROUP_ATTACHMENT_ENDPOINT, sender, to, message, attachment
        )

    def _send_text(
        self,
        endpoint: str,
        sender: str,
        to: str,
        message: str,
        ref_id: str | None,
        ref_url: str | None,
    ) -> bool:
        response = self._http.post(
            endpoint,
            {
                "sender": sender,
                "to": to,
                "message": message,
                "ref_id": ref_id,
                "ref_url": ref_url,
            },
        )
        return self._report(response, endpoint)

    def _send_attachment(
        self, endpoint: str, sender: str, to: str, message: str, attachment: FileSpec
    ) -> bool:
        response = self._http.post_multipart(
            endpoint,
            {"sender": sender, "to": to, "message": message},
            {"attachment": attachment},
        )
        return self._report(response, endpoint)

    @staticmethod
    def _report(response: httpx.Response, endpoint: str) -> bool:
        if not response.is_success:
            logger.warning("WhatsApp send failed", status=response.status_code, endpoint=endpoint)
            return False
        return True
