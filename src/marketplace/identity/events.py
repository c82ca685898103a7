"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A buyer or seller account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    username = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)
