"""Article page fetching for the safety-news scrape flow."""

import httpx
from trafilatura import extract, extract_metadata

from app.core.errors import ArticleFetchError
from app.core.logging import get_logger
from app.core.schemas_articles import FetchedPage

logger = get_logger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; SafetyDocsEngine/1.0; +article-scrape)"


class ArticleFetcher:
    """Fetch an article page and pull out its main text, title and hero image."""

    def __init__(self, timeout: float = 20.0, max_chars: int = 40_000):
        self.timeout = timeout
        self.max_chars = max_chars

    async def fetch_html(self, url: str) -> str:
        """
        Download a page.

        Raises:
            ArticleFetchError: On timeout, connection failure or non-2xx status
        """
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            logger.info(f"Fetching article: {url}")
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise ArticleFetchError(
                    f"Article request returned HTTP {e.response.status_code}",
                    url=url,
                    status_code=e.response.status_code,
                ) from e
            except httpx.TimeoutException as e:
                raise ArticleFetchError("Article request timed out", url=url) from e
            except httpx.HTTPError as e:
                raise ArticleFetchError(
                    f"Article request failed: {type(e).__name__}", url=url
                ) from e
            return response.text

    def parse(self, url: str, html: str) -> FetchedPage:
        """Extract main text and metadata from downloaded HTML."""
        text = extract(html, url=url, include_comments=False, include_tables=True) or ""
        metadata = extract_metadata(html, default_url=url)
        title = getattr(metadata, "title", None) if metadata else None
        image_url = getattr(metadata, "image", None) if metadata else None

        if not text.strip():
            raise ArticleFetchError("No article text could be extracted", url=url, status_code=422)

        truncated = len(text) > self.max_chars
        if truncated:
            text = text[: self.max_chars]

        logger.info(
            f"Extracted {url}: {len(text)} chars, title: {title or 'N/A'}"
            + (" (truncated)" if truncated else "")
        )
        return FetchedPage(url=url, title=title, text=text, image_url=image_url, truncated=truncated)

    async def fetch(self, url: str) -> FetchedPage:
        html = await self.fetch_html(url)
        return self.parse(url, html)
