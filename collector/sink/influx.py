"""Sink InfluxDB v2 vía HTTP (line protocol).

POST {host}/api/v2/write?org=..&bucket=..&precision=ns
Authorization: Token <token>
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import httpx

from ..domain.sample import DataPoint
from .base import SinkWriteError
from .line_protocol import encode_points

logger = logging.getLogger(__name__)

WRITE_PATH = "/api/v2/write"


class InfluxSink:
    """Escribe batches en un bucket de InfluxDB v2.

    Uso:
        sink = InfluxSink(host, org, token)
        await sink.write("telemetry", points)
        await sink.aclose()
    """

    def __init__(
        self,
        host: str,
        org: str,
        token: str,
        *,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._url = host.rstrip("/") + WRITE_PATH
        self._org = org
        self._headers = {
            "Authorization": f"Token {token}",
            "Content-Type": "text/plain; charset=utf-8",
            "Accept": "application/json",
        }
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = client is None

    async def write(self, bucket: str, points: Sequence[DataPoint]) -> None:
        """Escribe los puntos en una sola petición.

        Raises:
            SinkWriteError: respuesta no 2xx o fallo de transporte
        """
        body = encode_points(points)
        try:
            resp = await self._client.post(
                self._url,
                params={"org": self._org, "bucket": bucket, "precision": "ns"},
                content=body.encode("utf-8"),
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise SinkWriteError(f"{type(e).__name__}: {e}") from e

        if resp.status_code >= 300:
            raise SinkWriteError(resp.text.strip() or resp.reason_phrase, status_code=resp.status_code)

        logger.debug("[INFLUX] Wrote %d points to bucket=%s", len(points), bucket)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
