"""voyage_feed package"""
from .chemroad_journey import VOYAGE_FEED
from .feed_store import VoyageFeedStore
__all__ = ["VOYAGE_FEED", "VoyageFeedStore"]
