"""User aggregate: storefront accounts and their role."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.errors import NoEffectiveChange


class Role(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@storefront.aggregate
class User:
    email: String(required=True, max_length=254)
    name: String(max_length=255)
    photo_url: String(max_length=500)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime()
    last_login: DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        email = self.email or ""
        local_part, _, domain_part = email.partition("@")
        if not local_part or "." not in domain_part or " " in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @classmethod
    def register(cls, email, name=None, photo_url=None):
        from storefront.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            email=email.strip().lower(),
            name=name,
            photo_url=photo_url,
            role=Role.CUSTOMER.value,
            created_at=now,
            last_login=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def record_login(self):
        self.last_login = datetime.now(UTC)

    def change_role(self, role):
        from storefront.user.events import UserRoleChanged

        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError({"role": [f"Invalid role value: {role}"]}) from None

        if new_role.value == self.role:
            raise NoEffectiveChange(f"User role unchanged: already {self.role}", field="role")

        previous = self.role
        self.role = new_role.value
        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous,
                new_role=new_role.value,
                changed_at=datetime.now(UTC),
            )
        )
