"""Identity and notice ports used by the conversation session.

The session needs two things from its surroundings: the signed-in user's
email, and a way to tell the user something went wrong. Both are small
protocols so tests can substitute plain objects.
"""

from typing import Protocol

from nicegui import app, ui

EMAIL_KEY = "email"


class IdentityProvider(Protocol):
    """Supplies the email of the signed-in user, or None."""

    @property
    def email(self) -> str | None: ...


class Notifier(Protocol):
    """Shows a notice to the user."""

    def notify(self, message: str, kind: str = "negative") -> None: ...


class StorageIdentity:
    """Identity kept in NiceGUI per-user storage by the sign-in page."""

    @property
    def email(self) -> str | None:
        value = app.storage.user.get(EMAIL_KEY)
        return value or None

    def sign_in(self, email: str) -> None:
        app.storage.user[EMAIL_KEY] = email.strip()

    def sign_out(self) -> None:
        app.storage.user.pop(EMAIL_KEY, None)


class UiNotifier:
    """Notifier backed by ``ui.notify`` toasts."""

    def notify(self, message: str, kind: str = "negative") -> None:
        ui.notify(message, type=kind, position="top")
