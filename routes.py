# routes.py
from fastapi import FastAPI
from controller.fs_controller import fs_router
from controller.user_controller import user_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(user_router)
    app.include_router(fs_router)
