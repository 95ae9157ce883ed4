"""Pydantic schemas for the safety-news article scrape flow."""

from pydantic import Field, HttpUrl

from app.core.schemas_base import CamelModel, DocumentText, RequiredText


class ScrapeArticleInput(CamelModel):
    url: HttpUrl = Field(..., description="The URL of the article to scrape")


class ScrapeArticleOutput(CamelModel):
    """Title, Markdown body and optional hero image of a scraped article."""

    title: RequiredText = Field(..., description="The extracted title of the article")
    content: DocumentText = Field(
        ..., description="The full extracted content of the article, formatted in Markdown"
    )
    image_url: HttpUrl | None = Field(
        default=None, description="URL of the main image of the article, if found"
    )


class FetchedPage(CamelModel):
    """Main text and metadata pulled from an article page before prompting."""

    url: str
    title: str | None = None
    text: str
    image_url: str | None = None
    truncated: bool = False
