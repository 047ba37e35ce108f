"""
Session authentication for the YouTube Music internal API

The internal API is not authenticated with OAuth tokens but with the cookies
of a logged-in browser session. Login itself happens in a browser surface the
caller owns; this module only inspects the resulting cookies and derives what
a request needs:

- the ``Cookie`` header (every cookie of the service's root domain), and
- the signing key, the value of the session-authorization cookie that feeds
  the per-request SAPISIDHASH signature.

Signing-key preference:
    1. ``__Secure-3PAPISID`` (secure, partitioned variant)
    2. ``SAPISID`` (legacy name)

Being "authenticated" is a heuristic: a signing-key cookie exists. No call is
made to check the session; a stale or revoked cookie still reports
authenticated until the service rejects a request.

The auth context is recomputed on demand from the live cookie store and is
never persisted.

Cookie sources:
- any ``http.cookiejar.CookieJar`` (including ``requests`` cookie jars)
- a Netscape cookies.txt export, via ``load_cookie_jar()``
- a raw ``Cookie:`` header copied from the browser, via ``load_cookie_header()``
"""

from dataclasses import dataclass
from http.cookiejar import CookieJar, LoadError, MozillaCookieJar
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from requests.cookies import RequestsCookieJar

from .settings import get_settings
from ..utils.logger import get_logger
from ..exceptions import AuthUnavailableError


logger = get_logger(__name__)

SERVICE_COOKIE_DOMAIN = ".youtube.com"
SIGNING_KEY_COOKIES: Sequence[str] = ("__Secure-3PAPISID", "SAPISID")


@dataclass(frozen=True)
class AuthContext:
    """
    Request credentials derived from a cookie set

    Attributes:
        cookie_header: Semicolon-joined "name=value" pairs
        signing_key: Value of the preferred session-authorization cookie
        is_authenticated: True iff a signing key was found
    """
    cookie_header: str = ""
    signing_key: Optional[str] = None
    is_authenticated: bool = False

    def __repr__(self) -> str:
        # Keep cookie values out of logs and tracebacks
        return (
            f"AuthContext(cookies={self.cookie_header.count('=')}, "
            f"signing_key={'set' if self.signing_key else 'none'}, "
            f"is_authenticated={self.is_authenticated})"
        )


def _domain_matches(cookie_domain: str, domain: str) -> bool:
    cookie_domain = (cookie_domain or "").lstrip(".").lower()
    domain = domain.lstrip(".").lower()
    return cookie_domain == domain or cookie_domain.endswith("." + domain)


def cookies_for_domain(jar: Iterable, domain: str = SERVICE_COOKIE_DOMAIN) -> list:
    """
    Select the cookies visible for a root domain

    A cookie matches when its domain equals the root domain or is one of its
    subdomains (``music.youtube.com`` matches ``.youtube.com``). Leading dots
    are ignored on both sides.

    Args:
        jar: Iterable of cookie objects with ``name``, ``value`` and ``domain``
        domain: Root domain of the service

    Returns:
        List of matching cookies in jar order
    """
    return [cookie for cookie in jar if _domain_matches(getattr(cookie, "domain", ""), domain)]


def resolve_auth(
    cookies: Iterable,
    signing_key_names: Sequence[str] = SIGNING_KEY_COOKIES
) -> AuthContext:
    """
    Derive an AuthContext from the cookies of the service's root domain

    Pure function of its input: no network call, no mutation of the cookies.

    Args:
        cookies: Iterable of objects with ``name`` and ``value`` attributes
        signing_key_names: Signing-key cookie names in order of preference

    Returns:
        AuthContext with cookie header, signing key and login flag
    """
    cookies = list(cookies)
    # cookies.txt lines without a name load as name=<value>, value=None
    cookie_header = "; ".join(f"{cookie.name}={cookie.value or ''}" for cookie in cookies)

    signing_key = None
    for name in signing_key_names:
        match = next((cookie for cookie in cookies if cookie.name == name), None)
        if match is not None and match.value:
            signing_key = match.value
            break

    return AuthContext(
        cookie_header=cookie_header,
        signing_key=signing_key,
        is_authenticated=signing_key is not None,
    )


def load_cookie_jar(path: Union[str, Path]) -> MozillaCookieJar:
    """
    Load a Netscape-format cookies.txt export

    Session cookies (no expiry) are kept, as browser exports of a live
    session consist largely of them.

    Args:
        path: Path to the cookies.txt file

    Returns:
        Loaded cookie jar

    Raises:
        AuthUnavailableError: If the file is missing or not a cookies.txt file
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise AuthUnavailableError(
            f"Cookie file not found: {path}",
            details={'file_path': str(path)}
        )

    jar = MozillaCookieJar(str(path))
    try:
        jar.load(ignore_discard=True, ignore_expires=True)
    except (LoadError, OSError) as e:
        raise AuthUnavailableError(
            f"Could not read cookie file {path}: {e}",
            details={'file_path': str(path), 'original_error': str(e)}
        )

    logger.debug(f"Loaded {len(jar)} cookies from {path}")
    return jar


def load_cookie_header(header: str, domain: str = SERVICE_COOKIE_DOMAIN) -> CookieJar:
    """
    Build a cookie jar from a raw ``Cookie:`` header value

    Args:
        header: Header value such as "SID=...; SAPISID=..."
        domain: Domain to scope every cookie to

    Returns:
        Cookie jar holding one cookie per pair, blank pairs skipped
    """
    jar = RequestsCookieJar()
    for pair in header.split(";"):
        name, sep, value = pair.strip().partition("=")
        if not sep or not name:
            continue
        jar.set(name.strip(), value.strip(), domain=domain, path="/")
    return jar


class SessionCookieStore:
    """
    Live cookie source for the service

    Wraps a cookie jar (or a cookies.txt path that is re-read on every
    access) and produces a fresh AuthContext on demand. Nothing is cached,
    so a session cookie that disappears invalidates authentication on the
    next call.
    """

    def __init__(
        self,
        jar: Optional[CookieJar] = None,
        cookie_file: Optional[Union[str, Path]] = None,
        domain: str = SERVICE_COOKIE_DOMAIN,
        signing_key_names: Sequence[str] = SIGNING_KEY_COOKIES
    ):
        """
        Initialize cookie store

        Args:
            jar: In-memory cookie jar managed by the caller
            cookie_file: cookies.txt path, used when no jar is given
            domain: Root domain of the service
            signing_key_names: Signing-key cookie names in order of preference
        """
        self.jar = jar
        self.cookie_file = Path(cookie_file).expanduser() if cookie_file else None
        self.domain = domain
        self.signing_key_names = tuple(signing_key_names)

    @classmethod
    def from_settings(cls) -> 'SessionCookieStore':
        """Create a store for the cookie file configured in settings"""
        settings = get_settings()
        return cls(
            cookie_file=settings.get_cookie_file(),
            domain=settings.auth.cookie_domain,
            signing_key_names=settings.auth.signing_key_cookies,
        )

    def cookies(self) -> list:
        """
        Current cookies of the service's root domain

        Returns:
            List of cookies; empty when no source is configured

        Raises:
            AuthUnavailableError: If a configured cookie file cannot be read
        """
        if self.jar is not None:
            jar = self.jar
        elif self.cookie_file is not None:
            jar = load_cookie_jar(self.cookie_file)
        else:
            return []
        return cookies_for_domain(jar, self.domain)

    def resolve(self) -> AuthContext:
        """Recompute the AuthContext from the current cookies"""
        context = resolve_auth(self.cookies(), self.signing_key_names)
        logger.debug(f"Resolved {context!r}")
        return context
