"""User aggregate: buyers and sellers share one account model distinguished by role."""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, String

from marketplace.domain import marketplace


class UserRole(Enum):
    """Enumeration of marketplace roles."""

    BUYER = "Buyer"
    SELLER = "Seller"


@marketplace.aggregate
class User:
    """A registered account on the marketplace.

    Buyers fill carts and redeem coupons; sellers list products and issue coupons.
    The role is fixed at registration.
    """

    username: String(required=True, max_length=50, unique=True)
    email: String(required=True, max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    role: String(required=True, choices=UserRole)
    registered_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, username, email, role, first_name=None, last_name=None):
        from marketplace.identity.events import UserRegistered

        now = datetime.now()
        user = cls(
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                username=username,
                role=role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_buyer(self):
        return self.role == UserRole.BUYER.value

    @property
    def is_seller(self):
        return self.role == UserRole.SELLER.value
