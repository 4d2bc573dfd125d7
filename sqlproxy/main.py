# sqlproxy/main.py
import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError

from .config import Settings, settings as default_settings
from .db import run_sql
from .errors import ClientInputError, ExecutionError, MethodNotAllowed, ProxyError
from .nl2sql import generate_sql
from .validate import is_select, prompt_too_long

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, apikey",
}

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

QUIET_LOGGERS = ("httpx", "httpcore")


class QueryIn(BaseModel):
    prompt: str | None = None


async def _read_query(request: Request) -> QueryIn:
    try:
        return QueryIn.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise ClientInputError("Bad JSON body")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Builds the proxy app around one settings object.
    ``transport`` replaces the network for both upstream services (tests).
    """
    settings = settings or default_settings
    # httpx logs full request URLs at INFO, and the Gemini key is in the query string
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    app = FastAPI(title="SQL Proxy")
    app.state.settings = settings

    # CORS headers go on every response, errors and pre-flight included
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        if isinstance(exc, ExecutionError):
            # relay the database error untouched
            if isinstance(exc.body, str):
                return Response(content=exc.body, status_code=exc.status_code)
            return JSONResponse(exc.body, status_code=exc.status_code)

        if exc.status_code < 500:
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("Upstream failure: %s", exc.message)
        return JSONResponse({"detail": exc.message}, status_code=exc.status_code)

    @app.api_route("/{path:path}", methods=ROUTED_METHODS)
    async def query(request: Request, path: str):
        if request.method == "OPTIONS":
            return Response(status_code=204)
        if request.method != "POST":
            raise MethodNotAllowed()

        q = await _read_query(request)
        prompt = (q.prompt or "").strip()
        if not prompt:
            raise ClientInputError("Missing prompt")

        # protect the quota: long prompts only with an explicit override
        if prompt_too_long(prompt, settings.max_prompt_chars):
            raise ClientInputError(f"Prompt too long (> {settings.max_prompt_chars} chars)")

        async with httpx.AsyncClient(timeout=settings.http_timeout, transport=transport) as client:
            # 1) LLM -> SQL (with fallback model)
            sql = await generate_sql(prompt, settings, client)

            # 2) validate
            if not is_select(sql):
                raise ClientInputError("Only SELECT queries allowed")

            # 3) execute
            rows = await run_sql(sql, settings, client)

        logger.info("Served %s", sql)
        return JSONResponse({"sql": sql, "rows": rows})

    return app


app = create_app()
