from .router import router
from .service import SponsorService

__all__ = ["router", "SponsorService"]
