from .router import router, contact_router
from .service import MessageService

__all__ = ["router", "contact_router", "MessageService"]
