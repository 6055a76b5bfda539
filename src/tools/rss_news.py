"""
Bitcoin News Tools
==================

Fetch recent Bitcoin headlines from an RSS 2.0 (or Atom) feed.

The Canva designer pulls a handful of headlines for its design metadata.
Feed markup is parsed with BeautifulSoup's lxml-backed XML parser, which
tolerates the malformed entities many news feeds ship.

Item shape:
    {"title": "...", "link": "https://...", "published": "...", "description": "..."}
"""

from datetime import datetime, timezone

import httpx
from bs4 import BeautifulSoup

from src.tools import MCPTool, ToolRegistry, ToolResult
from src.tools.http import request_text
from src.utils.config import get_config
from src.utils.logger import Logger

logger = Logger("RssNews")

# Descriptions are trimmed to keep tool payloads small
MAX_DESCRIPTION_LENGTH = 280


def _text(node, name: str) -> str:
    """Stripped text of the first `name` child, or ''."""
    child = node.find(name)
    return child.get_text(strip=True) if child else ""


def _clean_description(raw: str) -> str:
    """Strip embedded HTML from a description and truncate it."""
    if not raw:
        return ""
    text = BeautifulSoup(raw, "lxml").get_text(" ", strip=True)
    if len(text) > MAX_DESCRIPTION_LENGTH:
        text = text[:MAX_DESCRIPTION_LENGTH].rstrip() + "..."
    return text


def parse_feed(xml: str, count: int) -> list[dict]:
    """
    Parse RSS <item> or Atom <entry> elements.

    Args:
        xml: Feed document
        count: Maximum number of items

    Returns:
        Up to `count` items in feed order
    """
    soup = BeautifulSoup(xml, "xml")
    items = []

    for node in soup.find_all(["item", "entry"], limit=count):
        link = _text(node, "link")
        if not link:
            # Atom puts the URL in an attribute
            link_tag = node.find("link")
            link = link_tag.get("href", "") if link_tag else ""

        items.append({
            "title": _text(node, "title"),
            "link": link,
            "published": _text(node, "pubDate") or _text(node, "updated") or _text(node, "published"),
            "description": _clean_description(_text(node, "description") or _text(node, "summary")),
        })

    return items


async def fetch_bitcoin_news(
    count: int = 3,
    feed_url: str | None = None,
    client: httpx.AsyncClient | None = None
) -> dict:
    """
    Fetch the latest Bitcoin headlines.

    Args:
        count: Number of items to return
        feed_url: Feed to read (defaults to BITCOIN_NEWS_FEED_URL)
        client: Optional HTTP client

    Returns:
        {"items": [...], "source": feed_url, "fetched_at": iso timestamp}

    Raises:
        httpx.HTTPError: If the feed cannot be downloaded
    """
    url = feed_url or get_config().news.feed_url
    logger.debug(f"Fetching news feed: {url}")

    body = await request_text(url, client=client)
    items = parse_feed(body, count)

    logger.info(f"Fetched {len(items)} news items")
    return {
        "items": items,
        "source": url,
        "fetched_at": datetime.now(timezone.utc).isoformat(),
    }


# ==============================================================================
# Tool: Bitcoin News
# ==============================================================================

async def _bitcoin_news(params: dict) -> ToolResult:
    """Return recent headlines."""
    count = params.get("count") or get_config().news.item_count
    try:
        news = await fetch_bitcoin_news(count, params.get("feed_url"))
    except httpx.HTTPError as e:
        logger.error("News feed request failed", e)
        return ToolResult(success=False, error=f"Failed to fetch news feed: {e}")
    return ToolResult(success=True, data=news)


news_tool = MCPTool(
    name="fetch_bitcoin_news",
    description="Fetch the latest Bitcoin news headlines from an RSS feed.",
    parameters={
        "type": "object",
        "properties": {
            "count": {"type": "integer", "minimum": 1, "maximum": 50, "default": 3},
            "feed_url": {"type": "string", "description": "Override the configured feed URL"}
        },
        "required": []
    },
    execute=_bitcoin_news
)


def register_news_tools(registry: ToolRegistry) -> None:
    """Register the news tool with a registry."""
    registry.register(news_tool)
    logger.debug("Registered news tools")
