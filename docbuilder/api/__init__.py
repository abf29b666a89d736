"""FastAPI routers."""

from docbuilder.api.forms import router as forms_router

__all__ = [
    "forms_router",
]
