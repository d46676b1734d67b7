"""Cache – TTL store and background eviction."""
from oidc_metadata.cache.store import CacheEntry, CacheStore
from oidc_metadata.cache.sweeper import EvictionSweeper, SweeperState

__all__ = ["CacheEntry", "CacheStore", "EvictionSweeper", "SweeperState"]
