from hotfeed.services.feed import RefreshCoordinator, RefreshDecision

__all__ = ["RefreshCoordinator", "RefreshDecision"]
