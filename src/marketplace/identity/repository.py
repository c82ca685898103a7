"""Repository for the User aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.identity.user import User


@marketplace.repository(part_of=User)
class UserRepository:
    def find_by_username(self, username: str) -> User | None:
        return self._dao.query.filter(username=username).all().first

    def _get_with_role(self, user_id, label: str, has_role) -> User:
        try:
            user = self.get(user_id)
        except ObjectNotFoundError:
            user = None

        if user is None or not has_role(user):
            raise ObjectNotFoundError({"user": [f"{label} not found with id: {user_id}"]})
        return user

    def get_buyer(self, user_id) -> User:
        return self._get_with_role(user_id, "Buyer", lambda user: user.is_buyer)

    def get_seller(self, user_id) -> User:
        return self._get_with_role(user_id, "Seller", lambda user: user.is_seller)
