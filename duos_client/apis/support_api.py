from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient

# Zendesk form and custom field ids; they must match the configured ticket form.
TICKET_FORM_ID = 360000669472
TYPE_FIELD_ID = 360012744452
DESCRIPTION_FIELD_ID = 360007369412
NAME_FIELD_ID = 360012744292
EMAIL_FIELD_ID = 360012782111
CONTACT_EMAIL_FIELD_ID = 360018545031


class SupportApi:
    """Ticket submission to the support desk. Requests are sent without the session credential."""

    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    @staticmethod
    def build_ticket(
        name: str,
        ticket_type: str,
        email: str,
        subject: str,
        description: str,
        attachment_tokens: list[str],
        url: str,
    ) -> dict[str, Any]:
        return {
            "request": {
                "requester": {"name": name, "email": email},
                "subject": subject,
                "custom_fields": [
                    {"id": TYPE_FIELD_ID, "value": ticket_type},
                    {"id": DESCRIPTION_FIELD_ID, "value": description},
                    {"id": NAME_FIELD_ID, "value": name},
                    {"id": EMAIL_FIELD_ID, "value": email},
                    {"id": CONTACT_EMAIL_FIELD_ID, "value": email},
                ],
                "comment": {
                    "body": f"{description}\n\n------------------\nSubmitted from: {url}",
                    "uploads": attachment_tokens,
                },
                "ticket_form_id": TICKET_FORM_ID,
            }
        }

    def create_request(self, ticket: dict[str, Any]) -> int:
        envelope = self._http_client.request_lenient(
            "POST",
            f"{self._settings.support_url}/api/v2/requests.json",
            json_body=ticket,
            authenticated=False,
        )
        return envelope.status_code

    def upload_attachment(self, content: bytes) -> Any:
        envelope = self._http_client.request_lenient(
            "POST",
            f"{self._settings.support_url}/api/v2/uploads",
            params={"filename": "Attachment"},
            headers={"Content-Type": "application/binary"},
            data=content,
            authenticated=False,
        )
        payload = envelope.json() or {}
        return payload.get("upload")
