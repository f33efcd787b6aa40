"""User registration and role management: commands and handler.

Registration is an upsert keyed on email: a first sign-in creates the user as
a customer, later sign-ins only refresh ``last_login``.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import NoEffectiveChange, UserNotFound
from storefront.user.user import Role, User


@storefront.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=254)
    name: String(max_length=255)
    photo_url: String(max_length=500)


@storefront.command(part_of="User")
class ChangeUserRole:
    user_id: Identifier(required=True)
    role: String(required=True, max_length=20)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        existing = repo.find_by_email(command.email)
        if existing is not None:
            existing.record_login()
            repo.add(existing)
            return {"user_id": str(existing.id), "created": False}

        user = User.register(email=command.email, name=command.name, photo_url=command.photo_url)
        repo.add(user)
        logger.info("User registered", user_id=str(user.id))
        return {"user_id": str(user.id), "created": True}

    @handle(ChangeUserRole)
    def change_user_role(self, command):
        repo = current_domain.repository_for(User)
        try:
            user = repo.get(command.user_id)
        except ObjectNotFoundError:
            raise UserNotFound(command.user_id) from None

        user.change_role(command.role)
        repo.add(user)
        logger.info("User role changed", user_id=str(user.id), role=user.role)
        return user.role


def grant_admin(email: str) -> bool:
    """Register ``email`` if needed and give it the admin role.

    Returns False when the account was already an admin.
    """
    result = current_domain.process(RegisterUser(email=email), asynchronous=False)
    try:
        current_domain.process(ChangeUserRole(user_id=result["user_id"], role=Role.ADMIN.value), asynchronous=False)
    except NoEffectiveChange:
        return False
    return True
