"""Lookups over the User collection."""

from storefront.domain import storefront
from storefront.user.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        matches = self._dao.query.filter(email=email.strip().lower()).all().items
        return matches[0] if matches else None

    def everyone(self) -> list[User]:
        return self._dao.query.all().items
