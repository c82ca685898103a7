"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.identity.user import User, UserRole


@marketplace.command(part_of="User")
class RegisterUser:
    """Create a buyer or seller account."""

    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    role: String(required=True, choices=UserRole)


@marketplace.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_username(command.username) is not None:
            raise ValidationError({"username": [f"Username {command.username} is already taken"]})

        user = User.register(
            username=command.username,
            email=command.email,
            role=command.role,
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        return str(user.id)
