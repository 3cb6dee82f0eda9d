"""Email utilities."""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Dict, List, Optional

import aiosmtplib
from jinja2 import Template

from app.config import settings

logger = logging.getLogger(__name__)


WELCOME_SUBJECT = "Welcome to Builder Vancouver Newsletter!"

WELCOME_HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
</head>
<body style="font-family: system-ui, -apple-system, sans-serif; background: #0a0a0a; color: #f5f5f5; padding: 20px; line-height: 1.6;">
    <div style="max-width: 600px; margin: 0 auto; background: #171717; border: 1px solid #404040; border-radius: 12px; padding: 40px;">
        <h1 style="color: #fb923c; margin-top: 0;">Welcome to {{ site_name }}!</h1>
        <p style="color: #a3a3a3;">Thank you for subscribing to our newsletter. You'll now receive updates about:</p>
        <ul style="color: #a3a3a3;">
            {% for topic in topics %}
            <li>{{ topic }}</li>
            {% endfor %}
        </ul>
        <p style="color: #a3a3a3;">We're excited to have you as part of our Bitcoin builder community!</p>
        <hr style="border: none; border-top: 1px solid #404040; margin: 30px 0;">
        <p style="color: #737373; font-size: 12px;">
            <a href="{{ unsubscribe_url }}" style="color: #737373;">Unsubscribe</a> |
            <a href="{{ site_url }}" style="color: #737373;">Visit {{ site_name }}</a>
        </p>
    </div>
</body>
</html>
"""

WELCOME_TEXT_TEMPLATE = """Welcome to {{ site_name }}!

Thank you for subscribing to our newsletter. You'll now receive updates about:
{% for topic in topics %}
- {{ topic }}
{% endfor %}

We're excited to have you as part of our Bitcoin builder community!

Unsubscribe: {{ unsubscribe_url }}
Visit: {{ site_url }}
"""

NEWSLETTER_TOPICS = [
    "Upcoming meetups and workshops",
    "Event recaps and highlights",
    "New educational content",
    "Community announcements",
]


def is_email_configured() -> bool:
    """Check if SMTP credentials are set."""
    return settings.smtp_configured


def unsubscribe_url(token: str) -> str:
    return f"{settings.site_url.rstrip('/')}/api/newsletter/unsubscribe?token={token}"


def render_welcome_email(unsubscribe_token: str) -> tuple:
    """Return (html, text) bodies of the welcome email."""
    context = {
        "site_name": settings.site_name,
        "site_url": settings.site_url,
        "unsubscribe_url": unsubscribe_url(unsubscribe_token),
        "topics": NEWSLETTER_TOPICS,
    }
    html = Template(WELCOME_HTML_TEMPLATE, autoescape=True).render(**context)
    text = Template(WELCOME_TEXT_TEMPLATE, trim_blocks=True).render(**context)
    return html, text


async def send_email(to: List[str], subject: str, body_html: str, body_text: Optional[str] = None):
    """
    Send email via SMTP.

    Raises SMTP errors; callers decide whether a failure matters.
    """
    message = MIMEMultipart("alternative")
    message["From"] = f"{settings.newsletter_from_name} <{settings.newsletter_from_email}>"
    message["To"] = ", ".join(to)
    message["Subject"] = subject

    if body_text:
        message.attach(MIMEText(body_text, "plain"))
    message.attach(MIMEText(body_html, "html"))

    await aiosmtplib.send(
        message,
        hostname=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_pass,
        use_tls=settings.smtp_use_tls,
        start_tls=settings.smtp_start_tls,
    )
    logger.info(f"Email sent to {to}")


async def send_welcome_email(email: str, unsubscribe_token: str) -> None:
    """Send the welcome email to a new subscriber. Never raises."""
    if not is_email_configured():
        logger.warning(f"SMTP not configured, skipping welcome email to {email}")
        return

    try:
        body_html, body_text = render_welcome_email(unsubscribe_token)
        await send_email([email], WELCOME_SUBJECT, body_html, body_text)
    except Exception as e:
        logger.error(f"Failed to send welcome email to {email}: {e}")


async def send_newsletter(
    subject: str,
    body_html: str,
    body_text: str,
    recipients: List[str],
) -> Dict[str, int]:
    """Send a newsletter, one message per recipient so failures stay isolated."""
    if not is_email_configured():
        logger.warning("SMTP not configured, cannot send newsletter")
        return {"success": 0, "failed": len(recipients)}

    success = 0
    failed = 0
    for recipient in recipients:
        try:
            await send_email([recipient], subject, body_html, body_text)
            success += 1
        except Exception as e:
            logger.error(f"Failed to send newsletter to {recipient}: {e}")
            failed += 1

    logger.info(f"Newsletter '{subject}': {success} sent, {failed} failed")
    return {"success": success, "failed": failed}
