# storyhub/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storyhub.config import Settings, settings as default_settings
from storyhub.core.bootstrap import ensure_default_admin
from storyhub.core.db import Store
from storyhub.core.errors import AppError, InternalError, ValidationError
from storyhub.core.pubsub import Channel
from storyhub.core.security import TokenCodec
from storyhub.services import AnnouncementBoard, AuthService, CheckoutStub, ContentStore, MessagingHub

from storyhub.api.v1.routers import auth, stories, checkout, announcements, rooms
from storyhub.api.v1.routers.ws_chat import router as ws_chat_router

logger = logging.getLogger("uvicorn.error")


async def open_services(app: FastAPI) -> None:
    """
    Open the store and wire every service onto ``app.state``.
    The store handle and the token codec are created once here and passed
    down explicitly.
    """
    cfg: Settings = app.state.settings
    store = Store(cfg.database_url, generate_schemas=cfg.generate_schemas)
    await store.open()
    codec = TokenCodec(cfg.jwt_secret, expire_minutes=cfg.access_token_expire_minutes)
    content = ContentStore(store)

    app.state.store = store
    app.state.codec = codec
    app.state.auth = AuthService(store, codec)
    app.state.content = content
    app.state.checkout = CheckoutStub(content, cfg.checkout_base_url)
    app.state.announcements = AnnouncementBoard(store)
    app.state.hub = MessagingHub(store, Channel(), default_room=cfg.default_room)


async def close_services(app: FastAPI) -> None:
    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()


def create_app(cfg: Settings = default_settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await open_services(app)
        # Ensure there's a default admin account on first run
        await ensure_default_admin(cfg)
        try:
            yield
        finally:
            await close_services(app)

    app = FastAPI(title=cfg.APP_NAME, lifespan=lifespan)
    app.state.settings = cfg

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.to_dict()})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        err = ValidationError(f"{loc}: {first.get('msg', 'invalid request')}" if loc else None)
        return JSONResponse(status_code=err.status_code, content={"success": False, "error": err.to_dict()})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("[api] unhandled error on %s %s", request.method, request.url.path)
        err = InternalError()
        return JSONResponse(status_code=err.status_code, content={"success": False, "error": err.to_dict()})

    # REST
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(stories.router, prefix="/api/v1")
    app.include_router(checkout.router, prefix="/api/v1")
    app.include_router(announcements.router, prefix="/api/v1")
    app.include_router(rooms.router, prefix="/api/v1")

    # WebSocket
    app.include_router(ws_chat_router)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    return app


app = create_app()
