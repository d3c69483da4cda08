import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from app_route import router as assistant_router
from config import Settings, build_cors, configure_logging, get_settings
from core.dialogue_state import DialogueStateStore
from core.dispatcher import ActionDispatcher
from items_route import router as items_router
from middleware.request_id import RequestIDMiddleware
from middleware.timing import TimingMiddleware
from services.completion_gateway import RemoteCompletionGateway
from services.task_store import InMemoryTaskStore
from utils.response import failure_response

logger = logging.getLogger("main_app")


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------
def create_app(
    settings: Optional[Settings] = None,
    store: Optional[InMemoryTaskStore] = None,
    gateway: Optional[RemoteCompletionGateway] = None,
    state: Optional[DialogueStateStore] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.meta.app_name, version=settings.meta.version)
    app = build_cors(settings)(app)
    app.add_middleware(TimingMiddleware, slow_ms=settings.logging.slow_request_threshold_ms)
    app.add_middleware(RequestIDMiddleware)

    store = store if store is not None else InMemoryTaskStore()
    gateway = gateway or RemoteCompletionGateway.from_settings(settings)
    if state is None:
        state = DialogueStateStore(ttl_seconds=settings.dialogue.slot_ttl_seconds)
    if not gateway.enabled:
        logger.warning(f"{settings.llm.api_key_env} not set; chat and translation use static replies")

    app.state.settings = settings
    app.state.store = store
    app.state.gateway = gateway
    app.state.dispatcher = ActionDispatcher(store=store, gateway=gateway, state=state)

    app.include_router(assistant_router)
    app.include_router(items_router)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
        return failure_response("Invalid request body", errors=jsonable_errors(exc))

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Welcome to the Todo API"

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]


app = create_app()


if __name__ == "__main__":
    import uvicorn

    cfg = get_settings().fastapi
    uvicorn.run("main:app", host=cfg.host, port=cfg.port, reload=cfg.reload, workers=cfg.workers)
