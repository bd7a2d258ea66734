"""
ASCOM Alpaca API client.

Shared low-level client used by every device module. It owns the protocol
mechanics: URL construction, ClientID / ClientTransactionID bookkeeping,
the GET and PUT verbs, decoding of the Alpaca JSON envelope into typed
values, and capture of REST and device errors.

Requirements:
    - aiohttp

Example:
    >>> async with AlpacaClient(65535, ip="192.168.1.100", port=11111) as client:
    ...     connected = await client.get_connected("camera", 0)
    ...     await client.put("camera", 0, "startexposure", {"Duration": 5.0, "Light": True})
    ...     if client.error_number:
    ...         print(client.error_message)
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar

import aiohttp

from alpacalink.exceptions import (
    AlpacaDeviceError,
    AlpacaRestError,
    AlpacaTransportError,
    MalformedResponseError,
)
from alpacalink.logging_config import log_exception, log_timing

logger = logging.getLogger(__name__)

API_VERSION = 1
DEFAULT_TIMEOUT = 10.0
SLOW_REQUEST_SECONDS = 2.0
UNUSED_PORT = -1

UINT32_MAX = 2**32 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

T = TypeVar("T")


def resolve_url_base(secure: bool, domain: str, ip: str, port: int) -> str:
    """
    Build the scheme + host part of every request URL.

    A domain wins over ip and port: named hosts are expected to sit behind
    a reverse proxy on the default port. Empty domain and empty ip give a
    bare "http://" which is returned unchanged.
    """
    scheme = "https" if secure else "http"
    if domain:
        return f"{scheme}://{domain}"
    if port != UNUSED_PORT:
        return f"{scheme}://{ip}:{port}"
    return f"{scheme}://{ip}"


def format_value(value: Any) -> str:
    """Render a query or form value the way Alpaca servers parse it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ============================================================================
# Response Envelope
# ============================================================================

def _envelope_int(data: dict[str, Any], key: str) -> int:
    """Integer envelope field; missing or null reads as 0."""
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be an integer, got {type(value).__name__}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{key} must be an integer, got {value}")
    return int(value)


@dataclass
class AlpacaResponse:
    """Outcome of one HTTP exchange with an Alpaca server."""
    status_code: int
    body: str
    client_transaction_id: int = 0
    server_transaction_id: int = 0
    error_number: int = 0
    error_message: str = ""
    value: Any = None

    @property
    def is_rest_error(self) -> bool:
        """HTTP status signalled failure; the envelope fields are empty."""
        return self.status_code >= 400

    @property
    def is_device_error(self) -> bool:
        """The server answered but the device reported ErrorNumber != 0."""
        return not self.is_rest_error and self.error_number != 0

    @property
    def ok(self) -> bool:
        return not self.is_rest_error and self.error_number == 0

    @classmethod
    def from_http(
        cls,
        status_code: int,
        body: str,
        method: str = "",
        url: str = "",
    ) -> "AlpacaResponse":
        """
        Decode an HTTP status and body.

        Error statuses keep the raw body and skip envelope parsing. An empty
        body on success decodes as an envelope with default fields.

        Raises:
            MalformedResponseError: Body is not a JSON object with
                numeric envelope fields
        """
        if status_code >= 400:
            return cls(status_code=status_code, body=body)
        if not body.strip():
            return cls(status_code=status_code, body=body)

        try:
            data = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(
                f"Response is not valid JSON: {e}", method, url
            ) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(
                "Response is not an Alpaca envelope", method, url
            )

        try:
            return cls(
                status_code=status_code,
                body=body,
                client_transaction_id=_envelope_int(data, "ClientTransactionID"),
                server_transaction_id=_envelope_int(data, "ServerTransactionID"),
                error_number=_envelope_int(data, "ErrorNumber"),
                error_message=str(data.get("ErrorMessage") or ""),
                value=data.get("Value"),
            )
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(
                f"Invalid envelope field: {e}", method, url
            ) from e


# ============================================================================
# Value Shapes
# ============================================================================

def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected boolean, got {type(value).__name__}")
    return value


def _as_int32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {type(value).__name__}")
    if not INT32_MIN <= value <= INT32_MAX:
        raise TypeError(f"integer {value} out of int32 range")
    return value


def _as_float64(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected number, got {type(value).__name__}")
    return float(value)


def _as_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


# ============================================================================
# Client
# ============================================================================

class AlpacaClient:
    """
    Low-level client for one Alpaca server.

    One instance is shared by every device module talking to the same
    server. The request/response cycle runs under an asyncio lock, so a
    PUT's transaction ID and the error fields written after it always
    belong to the same call. The lock does not make the client thread-safe.

    Attributes:
        client_id: ClientID sent with every request (uint32)
        transaction_id: Last ClientTransactionID used by a PUT (uint32)
        error_number: HTTP status or ASCOM error number of the last call, 0 if none
        error_message: Response body or ASCOM error message of the last call
        last_response: AlpacaResponse of the last completed exchange
    """

    def __init__(
        self,
        client_id: int,
        secure: bool = False,
        domain: str = "",
        ip: str = "",
        port: int = UNUSED_PORT,
        transaction_id: int = 0,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = DEFAULT_TIMEOUT,
        raise_on_error: bool = False,
    ):
        """
        Initialize the client. No network I/O happens here.

        Args:
            client_id: Caller-chosen ClientID (0 to 2**32-1)
            secure: Use https instead of http
            domain: Host name; when set, ip and port are ignored
            ip: Server address used when domain is empty
            port: Server port, -1 for none
            transaction_id: Seed for ClientTransactionID
            session: Optional shared aiohttp session; created lazily if omitted
            timeout: Total timeout per request in seconds
            raise_on_error: Raise AlpacaRestError / AlpacaDeviceError instead
                of only recording the error fields
        """
        if not 0 <= client_id <= UINT32_MAX:
            raise ValueError(f"client_id must fit in uint32, got {client_id}")
        if not 0 <= transaction_id <= UINT32_MAX:
            raise ValueError(f"transaction_id must fit in uint32, got {transaction_id}")

        self.client_id = client_id
        self.transaction_id = transaction_id
        self.secure = secure
        self.domain = domain
        self.ip = ip
        self.port = port
        self.timeout = timeout
        self.raise_on_error = raise_on_error

        self.error_number = 0
        self.error_message = ""
        self.last_response: Optional[AlpacaResponse] = None

        self._url_base = resolve_url_base(secure, domain, ip, port)
        self._session = session
        self._owns_session = session is None
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(
        cls,
        config,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "AlpacaClient":
        """Build a client from an alpacalink.config.ClientConfig."""
        return cls(
            client_id=config.client_id,
            secure=config.secure,
            domain=config.domain,
            ip=config.ip,
            port=config.port,
            transaction_id=config.transaction_id,
            session=session,
            timeout=config.timeout,
            raise_on_error=config.raise_on_error,
        )

    @property
    def url_base(self) -> str:
        """Scheme and host, resolved once at construction."""
        return self._url_base

    def __repr__(self) -> str:
        return (
            f"AlpacaClient(url_base={self._url_base!r}, client_id={self.client_id}, "
            f"transaction_id={self.transaction_id})"
        )

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or (self._owns_session and self._session.closed):
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": "alpacalink/0.1 (ascom-alpaca-client)"}
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AlpacaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    # ------------------------------------------------------------------
    # URL construction
    # ------------------------------------------------------------------

    def build_url(self, device_type: str, device_number: int, action: str) -> str:
        """Return {url_base}/api/v1/{device_type}/{device_number}/{action}."""
        return (
            f"{self._url_base}/api/v{API_VERSION}/"
            f"{device_type}/{device_number}/{action}"
        )

    def _identifiers(self) -> dict[str, str]:
        return {
            "ClientID": str(self.client_id),
            "ClientTransactionID": str(self.transaction_id),
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _send(self, method: str, url: str, **kwargs: Any) -> AlpacaResponse:
        session = await self._get_session()
        operation = f"{method} {url} ClientTransactionID={self.transaction_id}"
        try:
            with log_timing(logger, operation, warn_threshold_sec=SLOW_REQUEST_SECONDS):
                async with session.request(
                    method,
                    url,
                    headers={"Accept": "application/json"},
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                    **kwargs,
                ) as response:
                    status = response.status
                    body = await response.text()
        except asyncio.TimeoutError as e:
            log_exception(logger, f"{method} {url} timed out", e, include_traceback=False)
            raise AlpacaTransportError(
                f"Request timed out after {self.timeout}s", method, url
            ) from e
        except aiohttp.ClientError as e:
            log_exception(logger, f"{method} {url} failed", e, include_traceback=False)
            raise AlpacaTransportError(f"Request failed: {e}", method, url) from e
        except UnicodeDecodeError as e:
            raise MalformedResponseError(
                f"Response body is not valid text: {e}", method, url
            ) from e

        return AlpacaResponse.from_http(status, body, method, url)

    def _record(self, response: AlpacaResponse, method: str, url: str):
        """Write the side-channel error fields for a completed exchange."""
        self.last_response = response

        if response.is_rest_error:
            self.error_number = response.status_code
            self.error_message = response.body
            logger.warning(f"{method} {url} returned HTTP {response.status_code}")
            if self.raise_on_error:
                raise AlpacaRestError(
                    f"HTTP {response.status_code} from {url}",
                    response.status_code,
                    response.body,
                )
        elif response.is_device_error:
            self.error_number = response.error_number
            self.error_message = response.error_message
            logger.warning(
                f"{method} {url} device error 0x{response.error_number:X}: "
                f"{response.error_message}"
            )
            if self.raise_on_error:
                raise AlpacaDeviceError(response.error_number, response.error_message)
        else:
            self.error_number = 0
            self.error_message = ""

    async def get(
        self,
        device_type: str,
        device_number: int,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
        convert: Optional[Callable[[Any], Any]] = None,
    ) -> AlpacaResponse:
        """
        Issue a read-only GET. Does not change transaction_id.

        Args:
            device_type: Alpaca device type, e.g. "camera"
            device_number: Device index on the server
            action: Endpoint name, e.g. "connected"
            params: Action-specific query parameters, e.g. {"Id": 2}
            convert: Optional check applied to Value of a successful reply.
                It runs before the error fields are written, so a rejected
                Value leaves them as they were.

        Returns:
            Decoded AlpacaResponse

        Raises:
            AlpacaTransportError: Network failure or undecodable body
            MalformedResponseError: convert rejected Value
        """
        url = self.build_url(device_type, device_number, action)
        async with self._lock:
            query = {k: format_value(v) for k, v in (params or {}).items()}
            query.update(self._identifiers())
            response = await self._send("GET", url, params=query)
            if convert is not None and response.ok:
                try:
                    response.value = convert(response.value)
                except TypeError as e:
                    raise MalformedResponseError(
                        f"Unexpected Value: {e}", "GET", url
                    ) from e
            self._record(response, "GET", url)
        return response

    async def put(
        self,
        device_type: str,
        device_number: int,
        action: str,
        form: Optional[Mapping[str, Any]] = None,
    ) -> AlpacaResponse:
        """
        Issue a state-changing PUT with a form-encoded body.

        transaction_id is incremented before the request is sent, so the
        first PUT of a fresh client carries seed + 1.

        Args:
            device_type: Alpaca device type, e.g. "switch"
            device_number: Device index on the server
            action: Endpoint name, e.g. "setswitch"
            form: Action-specific fields, e.g. {"Id": 0, "State": True}

        Returns:
            Decoded AlpacaResponse

        Raises:
            AlpacaTransportError: Network failure or undecodable body
        """
        url = self.build_url(device_type, device_number, action)
        async with self._lock:
            self.transaction_id = (self.transaction_id + 1) & UINT32_MAX
            data = {k: format_value(v) for k, v in (form or {}).items()}
            data.update(self._identifiers())
            response = await self._send("PUT", url, data=data)
            self._record(response, "PUT", url)
        return response

    # ------------------------------------------------------------------
    # Typed decoding
    # ------------------------------------------------------------------

    async def _get_typed(
        self,
        device_type: str,
        device_number: int,
        action: str,
        params: Optional[Mapping[str, Any]],
        zero: T,
        convert: Callable[[Any], T],
    ) -> T:
        response = await self.get(
            device_type, device_number, action, params, convert=convert
        )
        return response.value if response.ok else zero

    async def get_bool_response(
        self,
        device_type: str,
        device_number: int,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """GET and decode a boolean Value; False on REST or device error."""
        return await self._get_typed(
            device_type, device_number, action, params, False, _as_bool
        )

    async def get_int32_response(
        self,
        device_type: str,
        device_number: int,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> int:
        """GET and decode a signed 32-bit integer Value; 0 on error."""
        return await self._get_typed(
            device_type, device_number, action, params, 0, _as_int32
        )

    async def get_float64_response(
        self,
        device_type: str,
        device_number: int,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> float:
        """GET and decode a floating point Value; 0.0 on error."""
        return await self._get_typed(
            device_type, device_number, action, params, 0.0, _as_float64
        )

    async def get_string_response(
        self,
        device_type: str,
        device_number: int,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """GET and decode a string Value; empty string on error."""
        return await self._get_typed(
            device_type, device_number, action, params, "", _as_string
        )

    # ------------------------------------------------------------------
    # Methods common to all devices
    # ------------------------------------------------------------------

    async def get_connected(self, device_type: str, device_number: int) -> bool:
        return await self.get_bool_response(device_type, device_number, "connected")

    async def set_connected(
        self, device_type: str, device_number: int, connected: bool
    ) -> AlpacaResponse:
        return await self.put(
            device_type, device_number, "connected", {"Connected": connected}
        )

    async def get_description(self, device_type: str, device_number: int) -> str:
        return await self.get_string_response(device_type, device_number, "description")
