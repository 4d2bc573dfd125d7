import logging
from typing import Any

import httpx

from .config import Settings
from .errors import ExecutionError, ExecutionUnavailableError

logger = logging.getLogger(__name__)


async def run_sql(query: str, settings: Settings, client: httpx.AsyncClient) -> Any:
    """
    Sends a validated SELECT to the execution service (Supabase Edge Function)
    and returns the decoded rows.
    """
    try:
        resp = await client.post(
            settings.execution_url,
            headers={
                "apikey": settings.execution_key,
                "Authorization": f"Bearer {settings.execution_key}",
            },
            json={"query": query},
        )
    except httpx.HTTPError as e:
        logger.warning("Execution service unreachable: %s", e)
        raise ExecutionUnavailableError(f"Execution service unreachable: {e}") from e

    if not resp.is_success:
        logger.warning("Execution service returned %s", resp.status_code)
        try:
            body = resp.json()
        except ValueError:
            body = resp.text
        raise ExecutionError(resp.status_code, body)

    try:
        return resp.json()
    except ValueError as e:
        raise ExecutionUnavailableError("Execution service returned invalid JSON") from e
