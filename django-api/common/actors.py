from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """The authenticated caller as seen by services."""

    user_id: int
    email: str
    name: str = ""
    is_staff: bool = False

    def can_access(self, owner_id: int) -> bool:
        return self.is_staff or self.user_id == owner_id

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(
            user_id=user.pk,
            email=user.email,
            name=user.get_full_name() or user.get_username(),
            is_staff=user.is_staff,
        )
