"""
Subscription email rendering.
"""

from __future__ import annotations

from dataclasses import dataclass

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from portfolio.config import Settings
from portfolio.mail import MailMessage

SUBSCRIPTION_TEMPLATE = "subscription.html"


@dataclass(frozen=True)
class SocialLink:
    label: str
    url: str


SOCIAL_LINKS = (
    SocialLink("Facebook", "https://www.facebook.com/anshul.kumar.639692"),
    SocialLink("Twitter", "https://x.com/anshul_000012"),
    SocialLink("Instagram", "https://www.instagram.com/anshul_6396"),
    SocialLink("LinkedIn", "https://www.linkedin.com/in/anshul-kumar-b92421306/"),
    SocialLink("Youtube", "https://www.youtube.com/@codewith47"),
)

_env = Environment(
    loader=PackageLoader("portfolio", "templates"),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
)


def render_subscription_html(sender_name: str) -> str:
    template = _env.get_template(SUBSCRIPTION_TEMPLATE)
    return template.render(sender_name=sender_name, social_links=SOCIAL_LINKS)


def render_subscription_text(sender_name: str) -> str:
    return f"Hello! This is {sender_name}"


def build_subscription_email(recipient: str, settings: Settings) -> MailMessage:
    """Build the subscription confirmation sent from the configured sender."""
    return MailMessage(
        sender=settings.mail_username or "",
        sender_name=settings.mail_from_name,
        recipient=recipient,
        subject=settings.mail_subject,
        text=render_subscription_text(settings.mail_from_name),
        html=render_subscription_html(settings.mail_from_name),
    )
