"""Asynchronous HTTP communication used by the remote translation providers.

The `AsyncHttp` class wraps one aiohttp session shared by every provider. Responses are decoded
through per-Content-Type handlers, and transport failures are mapped to `AsyncCommError`
carrying the HTTP status when the server answered.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final, Literal, Self

import aiohttp
from aiohttp.client import ClientSession

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from aiohttp.client import ClientResponse


__all__: list[str] = ["AsyncCommError", "AsyncCommInvalidContentTypeError", "AsyncCommTimeoutError", "AsyncHttp"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod = Literal["GET", "POST"]

CONNECT_TIMEOUT: Final[float] = 1.0


class AsyncHttp:
    """Asynchronous HTTP client for GET and POST requests.

    The aiohttp session is created lazily on first use, so the client can be built
    outside a running event loop and reused after close().
    """

    def __init__(self, *, default_timeout: float = 10.0) -> None:
        """Initialize the client and register the default content type handlers.

        The default handlers include:
            - "text/plain": Decodes bytes to a UTF-8 string.
            - "text/html": Decodes bytes to a UTF-8 string.
            - "application/json": Parses bytes as JSON.

        Args:
            default_timeout (float): Total timeout in seconds applied when a request does not give one.
        """
        logger.debug("%s initializing", self.__class__.__name__)
        self.__session: ClientSession | None = None
        self.default_timeout: float = default_timeout
        self.content_handlers: dict[str, Callable[[bytes], Any]] = {}

        self.add_handler("text/plain", lambda x: x.decode("utf-8"))
        self.add_handler("text/html", lambda x: x.decode("utf-8"))
        self.add_handler("application/json", lambda x: json.loads(x.decode("utf-8")))

    async def __aenter__(self) -> Self:
        self.initialize_session(suppress_already_log=True)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    def initialize_session(self, *, suppress_already_log: bool = False) -> None:
        """Initialize the aiohttp session. Must be called from a running event loop.

        Args:
            suppress_already_log (bool): If True, do not log when the session is already initialized.
        """
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession(raise_for_status=True)
            logger.debug("%s session initialized", self.__class__.__name__)
        elif not suppress_already_log:
            logger.debug("%s session already initialized", self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        """Get the current aiohttp session, creating it if needed."""
        self.initialize_session(suppress_already_log=True)
        if self.__session is None:
            msg = "Session is not initialized"
            raise RuntimeError(msg)
        return self.__session

    @property
    def is_open(self) -> bool:
        return self.__session is not None and not self.__session.closed

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
            logger.debug("%s session closed", self.__class__.__name__)

    async def get(
        self,
        *,
        url: str,
        params: dict[str, str] | None = None,
        total_timeout: float | None = None,
    ) -> Any:
        """Perform an asynchronous HTTP GET request.

        Args:
            url (str): The URL to send the GET request to.
            params (dict[str, str] | None): Query-string parameters, URL-encoded by aiohttp.
            total_timeout (float | None): Total timeout in seconds. None uses the client default.

        Returns:
            Any: The decoded response data.
        """
        return await self._request("GET", url=url, params=params, total_timeout=total_timeout)

    async def post(
        self,
        *,
        url: str,
        data: Any | None = None,
        params: dict[str, str] | None = None,
        total_timeout: float | None = None,
    ) -> Any:
        """Perform an asynchronous HTTP POST request with a JSON body.

        Args:
            url (str): The URL to send the POST request to.
            data (Any | None): JSON-serializable request body.
            params (dict[str, str] | None): Optional query parameters for the request.
            total_timeout (float | None): Total timeout in seconds. None uses the client default.

        Returns:
            Any: The decoded response data.
        """
        return await self._request("POST", url=url, params=params, json=data, total_timeout=total_timeout)

    async def decode_response(self, resp: ClientResponse) -> Any:
        """Parse the response body according to its Content-Type.

        Args:
            resp (ClientResponse): The response object from the aiohttp request.

        Returns:
            Any: The parsed response data, or None for an empty body.

        Raises:
            AsyncCommInvalidContentTypeError: If no handler is registered for the content type.
        """
        content_type: str = resp.headers.get("Content-Type", "").split(";")[0].strip()
        logger.debug("'Content-Type': '%s'", content_type)

        raw: bytes = await resp.read()
        if not raw:
            logger.debug("Received empty response")
            return None

        handler: Callable[[bytes], Any] | None = self.content_handlers.get(content_type)
        if handler:
            try:
                return handler(raw)
            except (UnicodeDecodeError, json.JSONDecodeError) as err:
                msg: str = f"Failed to decode '{content_type}' response"
                raise AsyncCommInvalidContentTypeError(msg) from err

        msg = f"Unknown Content-Type '{content_type}'"
        raise AsyncCommInvalidContentTypeError(msg)

    def add_handler(self, content_type: str, handler: Callable[[bytes], Any]) -> None:
        """Add or replace the handler for a content type."""
        if self.content_handlers.get(content_type):
            logger.warning("Handler for content type '%s' already exists, replacing it", content_type)
        self.content_handlers[content_type] = handler

    def _build_timeout(self, total_timeout: float | None) -> aiohttp.ClientTimeout:
        timeout: float = self.default_timeout if total_timeout is None else total_timeout
        if timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if timeout < CONNECT_TIMEOUT:
            # A connect timeout longer than the total would never fire.
            return aiohttp.ClientTimeout(total=timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=timeout)

    async def _request(
        self,
        method: HTTPMethod,
        *,
        url: str,
        total_timeout: float | None,
        **kwargs: Any,
    ) -> Any:
        """Perform an asynchronous HTTP request and map transport failures.

        Raises:
            AsyncCommTimeoutError: If the server did not answer in time.
            AsyncCommError: If the connection failed or the server answered with an error status.
        """
        logger.debug("[%s] url=%s timeout=%s", method, url, total_timeout)

        try:
            async with self.session.request(
                method=method,
                url=url,
                timeout=self._build_timeout(total_timeout),
                **kwargs,
            ) as resp:
                resp.raise_for_status()
                return await self.decode_response(resp)

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientResponseError as err:
            logger.debug(err)
            msg = "Error response from the server."
            raise AsyncCommError(msg, status=err.status) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = "The server could not be reached."
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors.

    Attributes:
        status (int | None): HTTP status of the error response, or None when no response was received.
    """

    def __init__(self, msg: str | BaseException, *, status: int | None = None) -> None:
        self.msg: str = str(msg)
        self.status: int | None = status
        if status is not None:
            self.msg = f"{self.msg}: status='{status}'"
        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """Error raised when a request does not complete within its timeout."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """Error raised when a response body cannot be decoded for its content type."""
