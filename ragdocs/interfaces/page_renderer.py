"""Abstract base class for page renderers.

A page renderer turns a URL into cleaned visible text plus a title.  Script,
style and no-script content is stripped before the text is returned.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderedPage:
    """Cleaned content of a fetched page.

    Attributes
    ----------
    url:
        The URL the content was fetched from.
    title:
        The page title, or the URL when the page has none.
    text:
        Visible body text with markup removed.
    """

    url: str
    title: str
    text: str


class IPageRenderer(ABC):
    """Contract for services that fetch and clean documentation pages."""

    @abstractmethod
    async def render(self, url: str) -> RenderedPage:
        """Fetch *url* and return its cleaned title and text.

        Raises
        ------
        ragdocs.utils.errors.PageFetchError
            If the page cannot be fetched.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release shared resources (called once at process shutdown)."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"web_page"``."""
