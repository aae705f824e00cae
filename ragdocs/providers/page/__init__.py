"""Page renderer implementations."""

from ragdocs.providers.page.web_page_provider import WebPageProvider, extract_page

__all__ = ["WebPageProvider", "extract_page"]
