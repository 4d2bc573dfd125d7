# sqlproxy/nl2sql.py

import logging
from typing import Any

import httpx

from .config import Settings
from .errors import GenerationError, QuotaExhaustedError
from .prompt import build_prompt
from .validate import ensure_limit, extract_sql

logger = logging.getLogger(__name__)

QUOTA_EXCEEDED = 429


def _candidate_text(payload: dict[str, Any]) -> str:
    # candidates[0].content.parts[0].text, "" if any level is missing
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


async def _call_model(
    client: httpx.AsyncClient, model: str, prompt: str, settings: Settings
) -> dict[str, Any]:
    url = f"{settings.gemini_base_url.rstrip('/')}/v1/models/{model}:generateContent"
    try:
        resp = await client.post(
            url,
            params={"key": settings.gemini_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {"temperature": 0},
            },
        )
    except httpx.HTTPError as e:
        raise GenerationError(f"Gemini API error: {e}") from e

    # error payloads come back with a non-2xx status, so read the body either way
    try:
        payload = resp.json()
    except ValueError as e:
        raise GenerationError(
            f"Gemini API error: invalid response (HTTP {resp.status_code})"
        ) from e
    if not isinstance(payload, dict):
        raise GenerationError("Gemini API error: unexpected response shape")
    return payload


async def generate_sql(
    user_prompt: str, settings: Settings, client: httpx.AsyncClient
) -> str:
    """
    Sends the fixed prompt to each configured model in turn and extracts the SQL.
    A quota error moves on to the next model; any other error is final.
    """
    prompt = build_prompt(user_prompt, settings.reference_date)

    for model in settings.gemini_models:
        logger.info("Requesting SQL from %s", model)
        res = await _call_model(client, model, prompt, settings)

        error = res.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            if code == QUOTA_EXCEEDED:
                logger.warning("Quota exceeded on %s, trying next model", model)
                continue
            message = error.get("message") if isinstance(error, dict) else None
            raise GenerationError(f"Gemini API error: {message or 'unknown'}")

        sql = extract_sql(_candidate_text(res))
        if sql is None:
            raise GenerationError("Gemini returned no SQL")

        sql = ensure_limit(sql, user_prompt, settings.default_limit)
        logger.debug("Model %s produced: %s", model, sql)
        return sql

    raise QuotaExhaustedError()
