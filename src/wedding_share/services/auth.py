"""Host session holder."""

from dataclasses import dataclass, field

from wedding_share.domain.errors import MissingFieldError
from wedding_share.domain.models import HostUser
from wedding_share.services.state import Observable

HOST_DISPLAY_NAME = "Wedding Host"


@dataclass
class AuthService:
    """Keeps the signed-in host; no credentials are checked."""

    current: Observable[HostUser | None] = field(
        default_factory=lambda: Observable(None)
    )

    @property
    def user(self) -> HostUser | None:
        return self.current.get()

    def login(self, email: str) -> HostUser:
        cleaned = email.strip()
        if not cleaned:
            raise MissingFieldError("email")
        return self.current.set(HostUser(name=HOST_DISPLAY_NAME, email=cleaned))

    def logout(self) -> None:
        self.current.set(None)
