from unittest.mock import Mock

import httpx
import pytest

from efihub.services.whatsapp import WhatsappService
from efihub.tests.utils.mock_transport import make_response


@pytest.fixture
def whatsapp(mock_http: Mock) -> WhatsappService:
    return WhatsappService(mock_http)


@pytest.mark.parametrize(
    ("method", "endpoint"),
    [
        ("send_message", "/whatsapp/send_message"),
        ("send_group_message", "/whatsapp/group/send_message"),
    ],
)
def test_text_messages_post_payload(
    whatsapp: WhatsappService, mock_http: Mock, method: str, endpoint: str
) -> None:
    mock_http.post.return_value = make_response(json_data={"success": False})

    sent = getattr(whatsapp, method)("6281200000000", "6281300000000", "Hello", ref_id="INV-1")

    # Body is not inspected, only HTTP status
    assert sent is True
    mock_http.post.assert_called_once_with(
        endpoint,
        {
            "sender": "6281200000000",
            "to": "6281300000000",
            "message": "Hello",
            "ref_id": "INV-1",
            "ref_url": None,
        },
    )


@pytest.mark.parametrize(
    ("method", "endpoint"),
    [
        ("send_attachment", "/whatsapp/send_message_with_attachment"),
        ("send_group_attachment", "/whatsapp/group/send_message_with_attachment"),
    ],
)
def test_attachments_post_multipart(
    whatsapp: WhatsappService, mock_http: Mock, method: str, endpoint: str
) -> None:
    mock_http.post_multipart.return_value = make_response(httpx.codes.CREATED)
    attachment = {"contents": b"%PDF", "filename": "invoice.pdf"}

    assert getattr(whatsapp, method)("628120", "group-1", "Invoice", attachment) is True
    mock_http.post_multipart.assert_called_once_with(
        endpoint,
        {"sender": "628120", "to": "group-1", "message": "Invoice"},
        {"attachment": attachment},
    )


@pytest.mark.parametrize(
    "method", ["send_message", "send_group_message", "send_attachment", "send_group_attachment"]
)
def test_sends_return_false_on_failure(
    whatsapp: WhatsappService, mock_http: Mock, method: str
) -> None:
    failed = make_response(httpx.codes.BAD_REQUEST, json_data={"message": "invalid number"})
    mock_http.post.return_value = failed
    mock_http.post_multipart.return_value = failed

    args = ("628120", "628130", "Hi")
    if "attachment" in method:
        args += ({"contents": b"x"},)

    assert getattr(whatsapp, method)(*args) is False
