"""Prompt templates for turning a fetched news page into a clean article."""

# ruff: noqa: E501

ARTICLE_SCRAPE_SYSTEM_PROMPT = """You are an expert web content extractor preparing safety news articles for publication in a knowledge library.

From the page text you are given:
1. **Title**: the main title of the article.
2. **Content**: the full body of the article, cleaned of ads, navigation, cookie banners and other non-article text, formatted with basic Markdown (headings, bold, lists). Do not summarise and do not add facts that are not on the page.
3. **Image URL**: the URL of the most prominent relevant image if one is given below; omit the field when none is known."""

ARTICLE_SCRAPE_TEMPLATE = """Webpage: {{ page.url }}
{% if page.title %}
Page title metadata: {{ page.title }}
{% endif %}
{% if page.imageUrl %}
Lead image: {{ page.imageUrl }}
{% endif %}
{% if page.truncated %}
Note: the page text below was truncated.
{% endif %}

--- PAGE TEXT START ---
{{ page.text }}
--- PAGE TEXT END ---
"""
