from fetchers.base import StatusSource
from fetchers.feed import FeedFetcher
from fetchers.page import PageScraper

__all__ = ["StatusSource", "FeedFetcher", "PageScraper"]
