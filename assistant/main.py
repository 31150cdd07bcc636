import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError

from assistant.container import build_container
from assistant.errors import ChatEndpointError, InternalFaultError, MalformedRequestError
from assistant.schemas import ChatErrorResponse, ChatRequest, ChatResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINT_ERROR = "Failed to process message"
WEB_DIR = Path(__file__).resolve().parent / "web"


@asynccontextmanager
async def lifespan(_app: FastAPI):  # type: ignore[no-untyped-def]
    _app.state.started_at = datetime.now(UTC).isoformat()
    logger.info(
        "startup delay_sec=%s web_enabled=%s",
        _app.state.container.chat_service.delay_sec,
        _app.state.container.web_enabled,
    )
    yield


app = FastAPI(title="Assistant Chat", version="0.1.0", lifespan=lifespan)
app.state.container = build_container()


@app.middleware("http")
async def attach_trace_id(request: Request, call_next):  # type: ignore[no-untyped-def]
    trace_id = request.headers.get("x-trace-id") or str(uuid4())
    request.state.trace_id = trace_id
    response = await call_next(request)
    response.headers["x-trace-id"] = trace_id
    return response


@app.exception_handler(ChatEndpointError)
async def chat_endpoint_error_handler(request: Request, exc: ChatEndpointError) -> JSONResponse:
    logger.info(
        "chat_error_response trace_id=%s kind=%s",
        getattr(request.state, "trace_id", None),
        exc.kind,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ChatErrorResponse(error=ENDPOINT_ERROR).model_dump(),
    )


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok", "service": "assistant-chat"}


@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={500: {"model": ChatErrorResponse}},
)
async def chat(request: Request) -> ChatResponse:
    trace_id = getattr(request.state, "trace_id", str(uuid4()))
    raw = await request.body()
    try:
        req = ChatRequest.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning(
            "chat_malformed_request trace_id=%s errors=%s",
            trace_id,
            exc.error_count(),
        )
        raise MalformedRequestError(str(exc)) from exc

    chat_service = app.state.container.chat_service
    logger.info("chat_request trace_id=%s message_chars=%s", trace_id, len(req.message))
    try:
        reply = await chat_service.reply(req.message)
    except Exception as exc:  # noqa: BLE001
        logger.exception("chat_internal_fault trace_id=%s", trace_id)
        raise InternalFaultError(str(exc)) from exc
    return ChatResponse(response=reply.response, timestamp=reply.timestamp.isoformat())


if app.state.container.web_enabled:

    @app.get("/", include_in_schema=False)
    def root() -> RedirectResponse:
        return RedirectResponse(url="/web/")

    app.mount("/web", StaticFiles(directory=WEB_DIR, html=True), name="web")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("assistant.main:app", host="127.0.0.1", port=8000)
