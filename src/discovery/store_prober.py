"""
Store Liveness Prober

Checks whether a store answers over HTTP and fetches its homepage HTML.

Each store is tried through exactly four URL variants:
    stored URL (or https://<domain>), its http:// downgrade,
    https://www.<domain>, http://www.<domain>

Status codes never raise. Transport failures (DNS, refused
connections, timeouts, redirect loops) and malformed URLs are caught,
and they only fail the variant being tried.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx

from src.utils.config import get_settings
from src.utils.domain_filter import clean_domain
from .models import FetchResult, LivenessCheck, LivenessStatus, StoreRecord

logger = logging.getLogger(__name__)


# =============================================================================
# PROBE PROFILES
# =============================================================================

@dataclass(frozen=True)
class ProbeProfile:
    """Timeouts (seconds) and redirect limit for one probing mode."""
    head_timeout: float
    get_timeout: float
    html_timeout: float
    max_redirects: int


FAST_PROFILE = ProbeProfile(head_timeout=1.2, get_timeout=2.5, html_timeout=4.0, max_redirects=1)
THOROUGH_PROFILE = ProbeProfile(head_timeout=5.0, get_timeout=9.0, html_timeout=12.0, max_redirects=2)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; DomainVerifier/1.0)"

TEXT_CONTENT_TYPES = ("text/", "html", "xml")


def profiles_from_settings() -> Dict[bool, ProbeProfile]:
    """Fast/thorough profiles using configured timeouts."""
    settings = get_settings()
    return {
        True: ProbeProfile(
            head_timeout=settings.FAST_HEAD_TIMEOUT,
            get_timeout=settings.FAST_GET_TIMEOUT,
            html_timeout=settings.FAST_HTML_TIMEOUT,
            max_redirects=FAST_PROFILE.max_redirects,
        ),
        False: ProbeProfile(
            head_timeout=settings.THOROUGH_HEAD_TIMEOUT,
            get_timeout=settings.THOROUGH_GET_TIMEOUT,
            html_timeout=settings.THOROUGH_HTML_TIMEOUT,
            max_redirects=THOROUGH_PROFILE.max_redirects,
        ),
    }


# =============================================================================
# HELPERS
# =============================================================================

def build_url_variants(store: StoreRecord) -> List[str]:
    """The four URL variants probed for a store, in order."""
    domain = clean_domain(store.domain or store.url)
    url = (store.url or "").strip()
    base = url if url.lower().startswith("http") else f"https://{domain}"

    if base.lower().startswith("https://"):
        downgrade = "http://" + base[len("https://"):]
    else:
        downgrade = base

    return [
        base,
        downgrade,
        f"https://www.{domain}",
        f"http://www.{domain}",
    ]


def is_acceptable_status(status_code: int) -> bool:
    """2xx and 3xx count as a live answer."""
    return 200 <= status_code < 400


def is_text_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "").lower()
    if not content_type:
        return True
    return any(marker in content_type for marker in TEXT_CONTENT_TYPES)


def extract_text(html: str) -> str:
    """Extract readable text from HTML."""
    # Remove script and style elements
    html = re.sub(r'<script[^>]*>.*?</script>', '', html, flags=re.DOTALL | re.IGNORECASE)
    html = re.sub(r'<style[^>]*>.*?</style>', '', html, flags=re.DOTALL | re.IGNORECASE)
    html = re.sub(r'<noscript[^>]*>.*?</noscript>', '', html, flags=re.DOTALL | re.IGNORECASE)

    # Remove HTML tags
    text = re.sub(r'<[^>]+>', ' ', html)

    # Clean up whitespace
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


# =============================================================================
# PROBER
# =============================================================================

class StoreProber:
    """
    HEAD/GET liveness probing and homepage fetching.

    Holds one httpx client per mode so each mode keeps its own redirect
    limit. Use as an async context manager or call close().
    """

    def __init__(
        self,
        fast_profile: ProbeProfile = FAST_PROFILE,
        thorough_profile: ProbeProfile = THOROUGH_PROFILE,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.profiles = {True: fast_profile, False: thorough_profile}
        headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
        self._clients = {
            fast: httpx.AsyncClient(
                timeout=profile.get_timeout,
                follow_redirects=True,
                max_redirects=profile.max_redirects,
                headers=headers,
                transport=transport,
            )
            for fast, profile in self.profiles.items()
        }

    @classmethod
    def from_settings(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "StoreProber":
        profiles = profiles_from_settings()
        return cls(
            fast_profile=profiles[True],
            thorough_profile=profiles[False],
            user_agent=get_settings().PROBE_USER_AGENT,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP clients."""
        for client in self._clients.values():
            await client.aclose()

    async def __aenter__(self) -> "StoreProber":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    # =========================================================================
    # LIVENESS
    # =========================================================================

    async def probe(self, store: StoreRecord, fast_verify: bool = False) -> LivenessCheck:
        """
        Probe each variant with HEAD, then GET, stopping at the first
        2xx/3xx answer.

        DEAD means some variant answered but never acceptably; UNKNOWN
        means no variant answered at all.
        """
        profile = self.profiles[fast_verify]
        client = self._clients[fast_verify]
        attempts = 0
        answered = False
        last_error: Optional[str] = None
        last_status: Optional[int] = None

        for url in build_url_variants(store):
            for method, timeout, follow in (
                ("HEAD", profile.head_timeout, False),
                ("GET", profile.get_timeout, True),
            ):
                attempts += 1
                try:
                    response = await client.request(
                        method, url, timeout=timeout, follow_redirects=follow,
                    )
                except (httpx.HTTPError, httpx.InvalidURL) as e:
                    last_error = f"{type(e).__name__}: {e}"
                    logger.debug(f"{method} {url} failed: {last_error}")
                    continue

                answered = True
                last_status = response.status_code
                if is_acceptable_status(response.status_code):
                    return LivenessCheck(
                        status=LivenessStatus.LIVE,
                        url=url,
                        method=method,
                        status_code=response.status_code,
                        attempts=attempts,
                    )

        status = LivenessStatus.DEAD if answered else LivenessStatus.UNKNOWN
        logger.debug(f"{store.domain} is {status.value} after {attempts} attempts")
        return LivenessCheck(
            status=status,
            status_code=last_status,
            attempts=attempts,
            error=last_error,
        )

    async def exists(self, store: StoreRecord, fast_verify: bool = False) -> bool:
        check = await self.probe(store, fast_verify=fast_verify)
        return check.is_live

    # =========================================================================
    # HTML FETCH
    # =========================================================================

    async def fetch_html(self, store: StoreRecord, fast_verify: bool = False) -> FetchResult:
        """GET each variant; return the first 2xx/3xx textual body."""
        profile = self.profiles[fast_verify]
        client = self._clients[fast_verify]

        for url in build_url_variants(store):
            try:
                response = await client.get(url, timeout=profile.html_timeout)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.debug(f"Fetch {url} failed: {type(e).__name__}: {e}")
                continue

            if is_acceptable_status(response.status_code) and is_text_response(response):
                return FetchResult(html=response.text, final_url=url)

        return FetchResult()
