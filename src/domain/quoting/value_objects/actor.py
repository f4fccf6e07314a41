"""
Actor Value Object

The already-authenticated caller handed to the core by the identity port.
Authorization in the core is limited to comparisons on this object.
"""

from pydantic import BaseModel, Field

from src.domain.quoting.constants import ActorRole


class Actor(BaseModel):
    """
    Authenticated caller.

    Attributes:
        actor_id: User, contractor or admin id (opaque)
        role: Caller's role

    Examples:
        >>> owner = Actor(actor_id="user-1", role=ActorRole.USER)
        >>> owner.owns("user-1")
        True
    """

    actor_id: str = Field(..., min_length=1)
    role: ActorRole

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    @property
    def is_contractor(self) -> bool:
        return self.role == ActorRole.CONTRACTOR

    def owns(self, user_id: str) -> bool:
        """True when this actor is the end user owning a record."""
        return self.role == ActorRole.USER and self.actor_id == user_id
