"""Mock data package."""

from nexus_manager.data.seed import initial_business_data

__all__ = ["initial_business_data"]
