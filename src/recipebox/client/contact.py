"""Contact form validation and submission."""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx
from bs4 import Tag

from recipebox.client.document import Document

logger = logging.getLogger(__name__)

CONTACT_PATH = "/api/contact"
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

MISSING_FIELDS = "Please fill in all fields."
INVALID_EMAIL = "Please enter a valid email address."
SENT = "Message sent successfully! (Demo mode)"


class ContactFormController:
    """Validates the contact form and posts it to the demo endpoint."""

    def __init__(self, document: Document, client: httpx.AsyncClient, path: str = CONTACT_PATH) -> None:
        self._document = document
        self._client = client
        self._path = path

    def _field_value(self, form: Tag, name: str) -> str:
        field = self._document.query(f'[name="{name}"]', form)
        return self._document.element_value(field).strip() if field is not None else ""

    def _set_status(self, text: str, css_class: Optional[str] = None) -> None:
        status = self._document.query("#contact-status")
        if status is None:
            return
        self._document.set_text(status, text)
        if css_class:
            status["class"] = [css_class]
        elif status.has_attr("class"):
            del status["class"]

    async def submit(self) -> bool:
        """Validate and send the form; return ``True`` when the server accepted it."""

        form = self._document.query("#contact-form")
        if form is None:
            return False
        payload = {name: self._field_value(form, name) for name in ("name", "email", "message")}
        self._set_status("")

        if not all(payload.values()):
            self._set_status(MISSING_FIELDS, "error")
            return False
        if not EMAIL_PATTERN.match(payload["email"]):
            self._set_status(INVALID_EMAIL, "error")
            return False

        button = self._document.query('button[type="submit"]', form)
        if button is not None:
            button["disabled"] = ""
            self._document.set_text(button, "Sending...")
        try:
            response = await self._client.post(self._path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._set_status(_server_error(exc.response), "error")
            return False
        except httpx.HTTPError as exc:
            logger.warning("Contact submission failed: %s", exc)
            self._set_status("Unable to send message. Please try again.", "error")
            return False
        finally:
            if button is not None:
                del button["disabled"]
                self._document.set_text(button, "Send")

        self._set_status(SENT, "success")
        self._document.reset_form(form)
        return True


def _server_error(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"Request failed with status {response.status_code}"


__all__ = ["ContactFormController", "EMAIL_PATTERN"]
