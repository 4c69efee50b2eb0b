import structlog

from .app_factory import create_service_app
from .logging_config import configure_logging
from .routers import plans

configure_logging()
logger = structlog.get_logger(__name__)

app = create_service_app(title="fitplan-service", version="0.1.0")

app.include_router(plans.router)
app.include_router(plans.router, prefix="/api")


@app.get("/")
def read_root():
    return {"message": "FitPlan service is running"}


@app.get("/health")
async def health():
    return {"status": "ok"}
