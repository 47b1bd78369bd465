"""Group catalog package."""

from groupledger.catalog.groups import Group, GroupCatalog

__all__ = ["Group", "GroupCatalog"]
