"""
YouTube Music internal API client with SAPISIDHASH request signing

This module talks to the private ``youtubei/v1`` JSON API used by the
music.youtube.com web client. Each operation builds a request body from the
fixed client request context plus its own parameters, sends a signed JSON
POST, and hands the decoded response to the matching parser.

Request signing:
    The service authenticates browser sessions with a per-request header

        Authorization: SAPISIDHASH {timestamp}_{sha1("{timestamp} {key} {origin}")}

    where ``key`` is the session-authorization cookie value and ``origin`` is
    the web origin. The timestamp is taken fresh for every request; the
    service rejects stale signatures, so correctness depends on wall-clock
    accuracy. Requests without a signing key are sent unsigned.

Transport:
    One POST per call over HTTPS with a single timeout (15 seconds by
    default) applied to the connect and to each socket read. There is no
    retry policy: every failure is terminal for that call and surfaces as one
    of the exceptions in ``ytmusic_shell.exceptions``.

Operations:
    get_home()               -> List[Shelf]
    search(query)            -> List[MediaItem]  (songs only)
    get_playlist_or_album(id)-> PlaylistDetail

The client does not check whether the session is logged in; that policy
belongs to the caller (see ``service.py``).
"""

import hashlib
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from .models import MediaItem, PlaylistDetail, Shelf
from .parser import ParserOptions, ResponseParser
from ..config.auth import AuthContext
from ..config.settings import get_settings
from ..exceptions import RequestTimeoutError, ResponseParseError, TransportError
from ..utils.helpers import truncate_string
from ..utils.logger import get_logger, log_performance


YT_MUSIC_ORIGIN = "https://music.youtube.com"
API_BASE_URL = f"{YT_MUSIC_ORIGIN}/youtubei/v1"
BROWSE_URL = f"{API_BASE_URL}/browse"
SEARCH_URL = f"{API_BASE_URL}/search"
# Part of the same endpoint family (watch queues); no operation here uses it
NEXT_URL = f"{API_BASE_URL}/next"

HOME_BROWSE_ID = "FEmusic_home"
# Opaque, versioned token selecting the "songs" search category
SONGS_SEARCH_PARAMS = "EgWKAQIIAWoMEAMQBBAJEA4QChAF"

DEFAULT_TIMEOUT = 15
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
# Longest prefix of an undecodable body quoted in error messages
ERROR_SNIPPET_LENGTH = 200


@dataclass(frozen=True)
class ClientRequestContext:
    """
    Identity of the calling client, sent with every request

    Attributes:
        client_name: Web client name the service expects
        client_version: Web client version string
        hl: Interface language (controls localized text in responses)
        gl: Content region
    """
    client_name: str = "WEB_REMIX"
    client_version: str = "1.20241023.01.00"
    hl: str = "tr"
    gl: str = "TR"

    @classmethod
    def from_settings(cls) -> 'ClientRequestContext':
        """Build the context from the ``ytmusic`` settings section"""
        config = get_settings().ytmusic
        return cls(
            client_name=config.client_name,
            client_version=config.client_version,
            hl=config.hl,
            gl=config.gl,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Request-body representation; a new dict on every call"""
        return {
            "client": {
                "clientName": self.client_name,
                "clientVersion": self.client_version,
                "hl": self.hl,
                "gl": self.gl,
            }
        }


def compute_sapisid_hash(
    signing_key: str,
    timestamp: Optional[int] = None,
    origin: str = YT_MUSIC_ORIGIN
) -> str:
    """
    Compute the SAPISIDHASH authorization value

    Pure function when ``timestamp`` is given; otherwise the current Unix
    time in whole seconds is used.

    Args:
        signing_key: Session-authorization cookie value
        timestamp: Unix timestamp in seconds
        origin: Web origin the request claims

    Returns:
        Header value "SAPISIDHASH {timestamp}_{sha1 hex}"
    """
    if timestamp is None:
        timestamp = int(time.time())
    digest = hashlib.sha1(f"{timestamp} {signing_key} {origin}".encode("utf-8")).hexdigest()
    return f"SAPISIDHASH {timestamp}_{digest}"


def build_headers(
    content_length: int,
    cookie_header: str,
    signing_key: Optional[str],
    origin: str = YT_MUSIC_ORIGIN,
    user_agent: str = DEFAULT_USER_AGENT,
    timestamp: Optional[int] = None
) -> Dict[str, str]:
    """
    Assemble the request headers the web client sends

    Args:
        content_length: Byte length of the encoded body
        cookie_header: Session cookie header
        signing_key: Signing key, None for an unsigned request
        origin: Web origin
        user_agent: Browser user agent string
        timestamp: Fixed signature timestamp (current time when None)

    Returns:
        Header dictionary
    """
    headers = {
        "User-Agent": user_agent,
        "Content-Type": "application/json",
        "Content-Length": str(content_length),
        "X-Origin": origin,
        "Origin": origin,
        "Referer": origin + "/",
        "Cookie": cookie_header,
        "X-Goog-AuthUser": "0",
    }
    if signing_key:
        headers["Authorization"] = compute_sapisid_hash(signing_key, timestamp, origin)
    return headers


def build_home_body(context: ClientRequestContext) -> Dict[str, Any]:
    return {"context": context.to_payload(), "browseId": HOME_BROWSE_ID}


def build_search_body(
    context: ClientRequestContext,
    query: str,
    params: str = SONGS_SEARCH_PARAMS
) -> Dict[str, Any]:
    return {"context": context.to_payload(), "query": query, "params": params}


def build_browse_body(context: ClientRequestContext, browse_id: str) -> Dict[str, Any]:
    return {"context": context.to_payload(), "browseId": browse_id}


def _remote_error_message(data: Any) -> Optional[str]:
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


class YTMusicClient:
    """
    Client for the YouTube Music internal browse and search endpoints

    The client keeps no mutable shared state: credentials are passed per
    call, headers are built per request and cookies set by responses are
    discarded, so a single instance can serve concurrent callers.
    """

    def __init__(
        self,
        request_context: Optional[ClientRequestContext] = None,
        parser: Optional[ResponseParser] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        origin: Optional[str] = None,
        user_agent: Optional[str] = None,
        search_params: Optional[str] = None
    ):
        """
        Initialize client, filling unspecified options from settings

        Args:
            request_context: Fixed client identity for request bodies
            parser: Response parser
            session: HTTP session used for transport
            timeout: Request timeout in seconds
            origin: Web origin used for headers and signing
            user_agent: Browser user agent string
            search_params: Opaque search filter token
        """
        self.settings = get_settings()
        self.logger = get_logger(__name__)

        self.request_context = request_context or ClientRequestContext.from_settings()
        self.parser = parser or ResponseParser(ParserOptions.from_settings(self.settings))
        self.session = session or requests.Session()
        self.timeout = timeout or self.settings.network.request_timeout or DEFAULT_TIMEOUT
        self.origin = origin or self.settings.ytmusic.origin or YT_MUSIC_ORIGIN
        self.user_agent = user_agent or self.settings.network.user_agent or DEFAULT_USER_AGENT
        self.search_params = search_params or self.settings.ytmusic.search_params or SONGS_SEARCH_PARAMS

    @log_performance
    def send_request(
        self,
        url: str,
        body: Dict[str, Any],
        cookie_header: str,
        signing_key: Optional[str]
    ) -> Any:
        """
        Send one signed JSON POST and decode the response

        Args:
            url: Endpoint URL
            body: Request object, serialized as JSON
            cookie_header: Session cookie header
            signing_key: Signing key, None to send unsigned

        Returns:
            Decoded JSON response

        Raises:
            RequestTimeoutError: No response within the timeout
            TransportError: Connection, DNS or TLS failure, or an HTTP error
                status with a JSON error body
            ResponseParseError: Response body is not valid JSON
        """
        payload = json.dumps(body, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        headers = build_headers(
            len(payload), cookie_header, signing_key,
            origin=self.origin, user_agent=self.user_agent
        )

        self.logger.debug(f"POST {url} ({len(payload)} bytes, signed={bool(signing_key)})")

        try:
            response = self.session.post(url, data=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                "Request timeout",
                details={'url': url, 'timeout': self.timeout, 'original_error': str(e)}
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Request failed: {e}",
                details={'url': url, 'original_error': str(e)}
            )

        try:
            status_code = response.status_code
            text = response.text
        finally:
            response.close()
            # Credentials come only from the per-call Cookie header
            self.session.cookies.clear()

        try:
            data = json.loads(text)
        except ValueError:
            raise ResponseParseError(
                "JSON parse error: " + truncate_string(text, ERROR_SNIPPET_LENGTH, suffix=""),
                details={'url': url, 'status_code': status_code, 'body_length': len(text)}
            )

        if status_code >= 400:
            message = _remote_error_message(data) or f"HTTP {status_code}"
            raise TransportError(
                f"Request rejected: {message}",
                details={'url': url, 'status_code': status_code}
            )

        return data

    def get_home(self, auth: AuthContext) -> List[Shelf]:
        """
        Fetch the personalized home feed

        Args:
            auth: Session credentials

        Returns:
            Shelves in display order
        """
        body = build_home_body(self.request_context)
        data = self.send_request(BROWSE_URL, body, auth.cookie_header, auth.signing_key)
        return self.parser.parse_home(data)

    def search(self, query: str, auth: AuthContext) -> List[MediaItem]:
        """
        Search for songs

        Args:
            query: Free-text query
            auth: Session credentials

        Returns:
            Song results in service order
        """
        body = build_search_body(self.request_context, query, self.search_params)
        data = self.send_request(SEARCH_URL, body, auth.cookie_header, auth.signing_key)
        return self.parser.parse_search(data)

    def get_playlist_or_album(self, browse_id: str, auth: AuthContext) -> PlaylistDetail:
        """
        Fetch a playlist or album by browse id

        Raw playlist ids must be prefixed with "VL" by the caller
        (see ``MediaItem.browse_target``).

        Args:
            browse_id: Browse identifier
            auth: Session credentials

        Returns:
            Header information and tracks
        """
        body = build_browse_body(self.request_context, browse_id)
        data = self.send_request(BROWSE_URL, body, auth.cookie_header, auth.signing_key)
        return self.parser.parse_playlist(data)

    def close(self) -> None:
        """Release pooled connections"""
        self.session.close()


# Global client instance
_client_instance: Optional[YTMusicClient] = None


def get_ytmusic_client() -> YTMusicClient:
    """Get the global YouTube Music client instance"""
    global _client_instance
    if not _client_instance:
        _client_instance = YTMusicClient()
    return _client_instance


def reset_ytmusic_client() -> None:
    """Reset the global client, closing its session"""
    global _client_instance
    if _client_instance:
        _client_instance.close()
    _client_instance = None
