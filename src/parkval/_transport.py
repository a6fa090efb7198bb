"""HTTP transport for the Realtime Database REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from parkval._constants import USER_AGENT
from parkval._redact import redact_for_log, redact_url
from parkval.config import ParkvalConfig
from parkval.exceptions import ParkvalPermissionDeniedError, ParkvalStoreError

_logger = logging.getLogger(__name__)

_PERMISSION_DENIED_STATUSES = frozenset({401, 403})


class Transport(Protocol):
    """Structural transport interface used by the store.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`RestTransport`) concrete.
    """

    async def get_json(self, path: str) -> Any:
        ...

    async def put_json(self, path: str, payload: Any) -> Any:
        ...


class RestTransport:
    """JSON-over-HTTPS transport authenticated with the database secret."""

    def __init__(self, config: ParkvalConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _url(self, path: str) -> str:
        node = path.strip("/")
        return f"{self._config.database_url}/{node}.json"

    def _params(self) -> dict[str, str]:
        if self._config.database_secret:
            return {"auth": self._config.database_secret}
        return {}

    async def get_json(self, path: str) -> Any:
        return await self._request("GET", path)

    async def put_json(self, path: str, payload: Any) -> Any:
        return await self._request("PUT", path, payload)

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = self._url(path)
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        body: str | None = None
        if method != "GET":
            body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
            headers["content-type"] = "application/json; charset=UTF-8"

        params = self._params()
        _logger.debug("%s %s", method, redact_url(url, params))
        if self._config.api_trace_enabled and payload is not None:
            _logger.debug("%s %s body=%s", method, path, redact_for_log(payload))

        try:
            async with self._http.request(
                method,
                url,
                params=params,
                data=body.encode("utf-8") if body is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status in _PERMISSION_DENIED_STATUSES:
                    raise ParkvalPermissionDeniedError(
                        f"PERMISSION_DENIED ({resp.status}) for {path}",
                        status_code=resp.status,
                        path=path,
                    )
                if resp.status != 200:
                    raise ParkvalStoreError(
                        f"HTTP {resp.status} from {path}: {text[:200]}",
                        status_code=resp.status,
                        path=path,
                    )
        except ParkvalStoreError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise ParkvalStoreError(
                f"Request to {path} failed: {exc}",
                path=path,
            ) from exc

        try:
            result = json.loads(text) if text.strip() else None
        except json.JSONDecodeError as exc:
            raise ParkvalStoreError(
                f"Invalid JSON from {path}: {text[:200]}",
                path=path,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("%s %s response=%s", method, path, redact_for_log(result))
        return result
