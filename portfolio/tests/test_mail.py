import unittest
from unittest.mock import AsyncMock, patch

import aiosmtplib

from portfolio.config import Settings
from portfolio.errors import MailError
from portfolio.mail import MailMessage, SmtpMailClient
from portfolio.notifier import SOCIAL_LINKS, build_subscription_email


def _message() -> MailMessage:
    return MailMessage(
        sender="me@example.com",
        sender_name="Me",
        recipient="a@b.com",
        subject="Hi",
        text="Hello",
        html="<p>Hello</p>",
    )


class SubscriptionEmailTests(unittest.TestCase):
    def test_build_subscription_email(self):
        settings = Settings(
            _env_file=None,
            mail_username="me@example.com",
            mail_from_name="Anshul Kumar",
            log_file=None,
        )
        message = build_subscription_email("a@b.com", settings)

        self.assertEqual(message.sender, "me@example.com")
        self.assertEqual(message.recipient, "a@b.com")
        self.assertEqual(message.subject, "Anshul | Portfolio")
        self.assertEqual(message.text, "Hello! This is Anshul Kumar")
        self.assertIn("Best regards,<br>Anshul Kumar", message.html)
        for link in SOCIAL_LINKS:
            self.assertIn(f'href="{link.url}"', message.html)

    def test_mime_has_text_and_html_parts(self):
        mime = _message().to_mime()
        self.assertEqual(mime["To"], "a@b.com")
        self.assertEqual(mime["From"], "Me <me@example.com>")
        self.assertEqual(
            [part.get_content_type() for part in mime.get_payload()],
            ["text/plain", "text/html"],
        )


class SmtpMailClientTests(unittest.IsolatedAsyncioTestCase):
    @patch("portfolio.mail.aiosmtplib.SMTP")
    async def test_send_logs_in_and_returns_response(self, mock_smtp):
        smtp = mock_smtp.return_value
        smtp.connect = AsyncMock()
        smtp.login = AsyncMock()
        smtp.send_message = AsyncMock(return_value=({}, "250 2.0.0 OK"))
        smtp.quit = AsyncMock()

        client = SmtpMailClient(
            host="smtp.example.com", port=587, username="me@example.com", password="pw"
        )
        response = await client.send(_message())

        self.assertEqual(response, "250 2.0.0 OK")
        mock_smtp.assert_called_once_with(
            hostname="smtp.example.com", port=587, use_tls=False, start_tls=True
        )
        smtp.login.assert_awaited_once_with("me@example.com", "pw")
        smtp.send_message.assert_awaited_once()
        smtp.quit.assert_awaited_once()

    @patch("portfolio.mail.aiosmtplib.SMTP")
    async def test_implicit_tls_on_465(self, mock_smtp):
        smtp = mock_smtp.return_value
        smtp.connect = AsyncMock()
        smtp.send_message = AsyncMock(return_value=({}, "250 OK"))
        smtp.quit = AsyncMock()

        await SmtpMailClient(host="smtp.example.com", port=465).send(_message())

        mock_smtp.assert_called_once_with(
            hostname="smtp.example.com", port=465, use_tls=True, start_tls=False
        )

    @patch("portfolio.mail.aiosmtplib.SMTP")
    async def test_transport_failure_raises_mail_error(self, mock_smtp):
        smtp = mock_smtp.return_value
        smtp.connect = AsyncMock()
        smtp.login = AsyncMock(
            side_effect=aiosmtplib.SMTPAuthenticationError(535, "bad credentials")
        )

        client = SmtpMailClient(
            host="smtp.example.com", port=587, username="me@example.com", password="pw"
        )
        with self.assertRaises(MailError) as ctx:
            await client.send(_message())

        self.assertIn("bad credentials", ctx.exception.detail)
        smtp.close.assert_called_once()

    @patch("portfolio.mail.aiosmtplib.SMTP")
    async def test_connection_refused_raises_mail_error(self, mock_smtp):
        mock_smtp.return_value.connect = AsyncMock(side_effect=OSError("connection refused"))

        with self.assertRaises(MailError) as ctx:
            await SmtpMailClient(host="localhost", port=25).send(_message())
        self.assertEqual(ctx.exception.detail, "connection refused")


if __name__ == "__main__":
    unittest.main()
