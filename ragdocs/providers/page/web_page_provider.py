"""Web page renderer using httpx and BeautifulSoup.

Fetches a documentation page over HTTP and reduces it to visible text:
``<script>``, ``<style>`` and ``<noscript>`` elements are removed, the title
comes from ``<title>`` (falling back to the URL), and the body text is taken
from the first content container present on the page.
"""

from __future__ import annotations

import httpx
import structlog
from bs4 import BeautifulSoup

from ragdocs.interfaces.page_renderer import IPageRenderer, RenderedPage
from ragdocs.utils.errors import PageFetchError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 30.0
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; ragdocs/0.1)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

# Containers tried in order; the first one present supplies the page text.
_CONTENT_SELECTORS = ("main", "article", ".content", ".documentation", "body")
_STRIPPED_TAGS = ("script", "style", "noscript")


def extract_page(html: str, url: str) -> RenderedPage:
    """Clean *html* into a :class:`RenderedPage`."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(list(_STRIPPED_TAGS)):
        tag.decompose()

    title = soup.title.get_text(strip=True) if soup.title else ""

    container = None
    for selector in _CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            break
    root = container if container is not None else soup
    text = root.get_text(separator=" ")

    return RenderedPage(url=url, title=title or url, text=text)


class WebPageProvider(IPageRenderer):
    """Page renderer backed by a single shared ``httpx.AsyncClient``.

    The client is created on the first :meth:`render` call and reused for
    every later page; :meth:`close` releases it at shutdown.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._client = http_client
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=_DEFAULT_HEADERS,
                follow_redirects=True,
            )
        return self._client

    # ------------------------------------------------------------------
    # IPageRenderer implementation
    # ------------------------------------------------------------------

    async def render(self, url: str) -> RenderedPage:
        client = self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise PageFetchError(
                message=f"Failed to fetch URL {url}: timeout ({exc})",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise PageFetchError(
                message=f"Failed to fetch URL {url}: HTTP {exc.response.status_code}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise PageFetchError(
                message=f"Failed to fetch URL {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        page = extract_page(response.text, url)
        logger.info("page_rendered", url=url, title=page.title, text_length=len(page.text))
        return page

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def get_provider_name(self) -> str:
        return "web_page"
