import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import settings
from .routes import api_router
from .templating import TEMPLATES_DIR

logging.getLogger("invoice_discount").setLevel(settings.log_level.upper())

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.include_router(api_router)
app.mount(
    "/static", StaticFiles(directory=TEMPLATES_DIR.parent / "static"), name="static"
)


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "ok"}
