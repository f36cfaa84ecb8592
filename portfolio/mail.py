"""
Outbound mail transport: an SMTP client built on aiosmtplib and an in-memory
client for tests and local runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from typing import Optional, Protocol

import aiosmtplib

from portfolio.errors import MailError


@dataclass
class MailMessage:
    sender: str
    recipient: str
    subject: str
    text: str
    html: str
    sender_name: Optional[str] = None

    def to_mime(self) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = self.subject
        msg["From"] = formataddr((self.sender_name or "", self.sender))
        msg["To"] = self.recipient
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid()
        # clients prefer the last alternative they can render
        msg.attach(MIMEText(self.text, "plain", "utf-8"))
        msg.attach(MIMEText(self.html, "html", "utf-8"))
        return msg


class MailClient(Protocol):
    """Defines the operations the API needs from the mail transport."""

    async def send(self, message: MailMessage) -> str:
        """Send a message and return the transport's accept response."""
        ...


@dataclass
class InMemoryMailClient:
    """Test double that records messages instead of sending them."""

    sent: list[MailMessage] = field(default_factory=list)
    fail_with: Optional[str] = None

    async def send(self, message: MailMessage) -> str:
        if self.fail_with:
            raise MailError("Failed to send email", self.fail_with)
        self.sent.append(message)
        return "250 Message accepted (in-memory)"

    def reset(self) -> None:
        self.sent.clear()
        self.fail_with = None


@dataclass
class SmtpMailClient:
    """
    SMTP client that opens one connection per message.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS.
    """

    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None

    async def send(self, message: MailMessage) -> str:
        smtp = aiosmtplib.SMTP(
            hostname=self.host,
            port=self.port,
            use_tls=self.port == 465,
            start_tls=self.port != 465,
        )
        try:
            await smtp.connect()
            if self.username and self.password:
                await smtp.login(self.username, self.password)
            _, response = await smtp.send_message(message.to_mime())
            await smtp.quit()
        except (aiosmtplib.SMTPException, OSError) as exc:
            smtp.close()
            raise MailError("Failed to send email", str(exc)) from exc
        return response
