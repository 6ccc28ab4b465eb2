"""
Notifications Module

Transactional email for the event: ticket delivery with an inline QR code
and replies to contact form messages. Templates live in ``templates/`` and
are rendered with Jinja2 before being handed to the SMTP mailer.
"""

from .mailer import InlineImage, Mailer, QR_CONTENT_ID

__all__ = ["InlineImage", "Mailer", "QR_CONTENT_ID"]
