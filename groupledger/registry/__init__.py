"""User registry package."""

from groupledger.registry.users import UserNode, UserRegistry

__all__ = ["UserNode", "UserRegistry"]
