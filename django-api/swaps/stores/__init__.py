from swaps.stores.interfaces import SwapStore
from swaps.stores.memory_store import InMemorySwapStore

__all__ = ["SwapStore", "InMemorySwapStore"]
