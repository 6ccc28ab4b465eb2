from datetime import datetime
from typing import Any, Dict

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from wknd.config import settings
from wknd.notifications.mailer import QR_CONTENT_ID


def _nl2br(value: str) -> Markup:
    return Markup("<br>").join(escape(line) for line in str(value).split("\n"))


env = Environment(
    loader=PackageLoader("wknd", "notifications/templates"),
    autoescape=select_autoescape(["html"]),
)
env.filters["nl2br"] = _nl2br


def _common_context() -> Dict[str, Any]:
    return {
        "brand": settings.TICKET_PREFIX,
        "support_email": settings.SUPPORT_EMAIL,
        "year": datetime.now().year,
    }


def ticket_email_subject(ticket: Dict[str, Any]) -> str:
    return f"Your {settings.TICKET_PREFIX} Event Ticket - {ticket['eventTitle']}"


def render_ticket_email(full_name: str, ticket: Dict[str, Any]) -> str:
    template = env.get_template("ticket_email.html")
    return template.render(full_name=full_name, ticket=ticket, qr_cid=QR_CONTENT_ID, **_common_context())


def reply_email_subject() -> str:
    return f"Re: Your {settings.TICKET_PREFIX} Inquiry"


def render_reply_email(reply_text: str) -> str:
    template = env.get_template("reply_email.html")
    return template.render(reply_text=reply_text, **_common_context())
