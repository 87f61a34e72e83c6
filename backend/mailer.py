"""
Mail relay for contact form submissions: SMTP for production and an
in-memory outbox for tests.
"""

from __future__ import annotations

import html
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import Protocol


@dataclass(frozen=True)
class ContactMessage:
    name: str
    email: str
    subject: str
    message: str

    def mail_subject(self) -> str:
        return f"Portfolio Contact: {self.subject}"

    def html_body(self) -> str:
        message_html = html.escape(self.message).replace("\n", "<br>")
        return (
            "<h2>New Contact Form Submission</h2>\n"
            f"<p><strong>Name:</strong> {html.escape(self.name)}</p>\n"
            f"<p><strong>Email:</strong> {html.escape(self.email)}</p>\n"
            f"<p><strong>Subject:</strong> {html.escape(self.subject)}</p>\n"
            "<h3>Message:</h3>\n"
            f"<p>{message_html}</p>\n"
            "<hr>\n"
            "<p><small>This message was sent from your portfolio contact form.</small></p>\n"
        )

    def text_body(self) -> str:
        return (
            f"Name: {self.name}\nEmail: {self.email}\nSubject: {self.subject}\n\n"
            f"Message:\n{self.message}\n"
        )


class DeliveryError(Exception):
    """The mail provider rejected the message or could not be reached."""


class Mailer(Protocol):
    """Delivers one contact message. Raises DeliveryError on failure."""

    def send(self, contact: ContactMessage) -> None:
        ...


@dataclass
class InMemoryMailer:
    """Test double that records every message instead of sending it."""

    recipient: str = "owner@example.test"
    outbox: list[ContactMessage] = field(default_factory=list)

    def send(self, contact: ContactMessage) -> None:
        self.outbox.append(contact)

    def reset(self) -> None:
        self.outbox.clear()


@dataclass
class SmtpMailer:
    """
    Sends through an authenticated SMTP relay with STARTTLS (Gmail by
    default). One attempt per message, no retry.
    """

    host: str
    port: int
    username: str
    password: str
    recipient: str
    timeout: float = 30

    def build_message(self, contact: ContactMessage) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.username
        message["To"] = self.recipient
        message["Subject"] = contact.mail_subject()
        message["Reply-To"] = contact.email
        message.set_content(contact.text_body())
        message.add_alternative(contact.html_body(), subtype="html")
        return message

    def send(self, contact: ContactMessage) -> None:
        message = self.build_message(contact)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.starttls()
                smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"SMTP delivery via {self.host} failed: {exc}") from exc
