from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from wknd import __version__
from wknd.config import settings
from wknd.database import init_db
from wknd.exceptions import register_exception_handlers
from wknd.auth import router as auth_router
from wknd.payments import router as payments_router, PaystackClient
from wknd.messages import router as messages_router, contact_router
from wknd.sponsors import router as sponsors_router
from wknd.admin import router as admin_router
from wknd.realtime import router as realtime_router, BroadcastHub
from wknd.notifications.mailer import Mailer

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    description="234 WKND Event Ticketing API",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(
    auth_router.router,
    prefix="/api/auth",
    tags=["Authentication"]
)

app.include_router(
    payments_router,
    prefix="/api/payments",
    tags=["Payments & Tickets"]
)

app.include_router(
    messages_router,
    prefix="/api/messages",
    tags=["Messages"]
)

app.include_router(
    sponsors_router,
    prefix="/api/sponsors",
    tags=["Sponsorship"]
)

app.include_router(
    contact_router,
    prefix="/api/contact",
    tags=["Contact"]
)

app.include_router(
    admin_router.router,
    prefix="/api/admin",
    tags=["Admin"]
)

app.include_router(
    realtime_router,
    tags=["Realtime Chat"]
)

@app.on_event("startup")
async def on_startup():
    init_db()
    app.state.gateway = PaystackClient(
        secret_key=settings.PAYSTACK_SECRET_KEY,
        currency=settings.CURRENCY,
        callback_url=settings.payment_callback_url,
        base_url=settings.PAYSTACK_BASE_URL,
        timeout=settings.PAYSTACK_TIMEOUT_SECONDS,
    )
    app.state.mailer = Mailer.from_settings(settings)
    app.state.hub = BroadcastHub(ack_delay=settings.ACK_DELAY_SECONDS)
    if not settings.PAYSTACK_SECRET_KEY:
        logger.warning("PAYSTACK_SECRET_KEY is not set; payment calls will be rejected")
    if not settings.EMAIL_USER:
        logger.warning("EMAIL_USER is not set; ticket and reply emails will fail")
    logger.info("%s server started, allowing origins %s", settings.PROJECT_NAME, settings.allowed_origins)

@app.on_event("shutdown")
async def on_shutdown():
    await app.state.hub.shutdown()
    await app.state.gateway.aclose()

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "OK", "message": f"{settings.PROJECT_NAME} Server is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
