# main.py
import locale
import logging
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color, ErrorMessage
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.storage import close_substrate, get_substrate
from controller.controller_dependencies import get_identity_scope
from fastapi.responses import JSONResponse
from util.constants import InternalURIs
from util.errors import SubstrateError
from util.logger import init_logger

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    try:
        # Warm the substrate (pings Redis when that backend is selected)
        init_logger()
        try:
            # Listing order follows the host locale
            locale.setlocale(locale.LC_COLLATE, "")
        except locale.Error as e:
            logger.warning("locale.collate.unavailable reason=%s", e)
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        await get_substrate()
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to initialize storage:", e)
        raise

    try:
        yield
    finally:
        try:
            await close_substrate()
        except Exception as e:
            print("Error closing storage:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,  # Allow cookies and other credentials
    allow_methods=["GET", "POST", "DELETE"],  # Allowed HTTP Methods
    allow_headers=["Authorization", "Content-Type", "Accept"],  # Allowed HTTP Headers
)


@app.get(InternalURIs.HEALTHZ)
async def healthz():
    return {"ok": True}


@app.get(InternalURIs.ROOT)
async def index(scope: str = Depends(get_identity_scope)):
    return {
        "name": settings.APP_NAME,
        "status": "ok",
        "endpoints": [
            f"{InternalURIs.USER} (GET)",
            f"{InternalURIs.FS_WRITE} (POST)",
            f"{InternalURIs.FS_READ} (GET)",
            f"{InternalURIs.FS_MKDIR} (POST)",
            f"{InternalURIs.FS_COPY} (POST)",
            f"{InternalURIs.FS_MOVE} (POST)",
            f"{InternalURIs.FS_DELETE} (DELETE)",
            f"{InternalURIs.FS_LIST} (GET)",
            f"{InternalURIs.FS_STAT} (GET)",
        ],
        "user": scope,
    }


@app.exception_handler(RequestValidationError)
async def usage_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(x) for x in err.get("loc", [])) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "ok": False,
            "error": "usage_error",
            "message": "Invalid request: " + ", ".join(fields),
        },
    )


@app.exception_handler(SubstrateError)
async def substrate_error_handler(request: Request, exc: SubstrateError):
    logger.error(
        "substrate.failed op=%s path=%s route=%s",
        exc.operation,
        exc.path,
        request.url.path,
    )
    return JSONResponse(
        status_code=ErrorMessage.SUBSTRATE_ERROR.value.http_status,
        content={
            "ok": False,
            "error": "substrate_error",
            "message": ErrorMessage.SUBSTRATE_ERROR.value.message,
            "operation": exc.operation,
        },
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
