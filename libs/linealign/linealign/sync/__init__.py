"""Editor view synchronization."""

from linealign.sync.synchronizer import ViewSynchronizer

__all__ = ["ViewSynchronizer"]
