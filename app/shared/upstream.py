# app/shared/upstream.py
"""
One outbound HTTP call with transport errors mapped onto the domain taxonomy.
"""
import logging
from typing import Any, Optional

import httpx

from app.shared.exceptions import ServiceTimeout, ServiceUnreachable, UpstreamRejected

logger = logging.getLogger(__name__)


def response_body(response: httpx.Response) -> Any:
    """Decoded JSON body if possible, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text


async def call_upstream(
    service: str,
    method: str,
    url: str,
    *,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send a single request to an external service.

    No retries: the caller surfaces the failure directly.

    Raises:
        ServiceTimeout: the request did not complete within `timeout`
        ServiceUnreachable: connection/DNS/protocol failure
        UpstreamRejected: non-2xx response (status and body attached)
    """
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport) as client:
            response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        logger.error(f"⏱️  {service} timed out after {timeout}s: {e}")
        raise ServiceTimeout(
            service,
            f"{service} is taking too long to respond",
            timeoutSeconds=timeout,
        ) from e
    except httpx.RequestError as e:
        logger.error(f"❌ Cannot reach {service}: {e}")
        raise ServiceUnreachable(service, f"Cannot connect to {service}: {e}") from e

    if not response.is_success:
        body = response_body(response)
        logger.error(f"❌ {service} responded {response.status_code}: {str(body)[:300]}")
        raise UpstreamRejected(service, response.status_code, body)

    return response
