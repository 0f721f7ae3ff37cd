"""Sign-in page that records the user's email for the chat page."""

import logging
import re

from nicegui import ui

from agrigpt.chat.identity import StorageIdentity

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value: str | None) -> bool:
    return bool(value and EMAIL_PATTERN.match(value.strip()))


@ui.page("/login")
def login_page() -> None:
    """Ask for an email and return to the chat."""
    identity = StorageIdentity()

    def sign_in() -> None:
        if not is_valid_email(email.value):
            email_error.set_visibility(True)
            return
        identity.sign_in(email.value)
        logger.info("User signed in")
        ui.navigate.to("/")

    with ui.column().classes("absolute-center items-center gap-4 w-80"):
        ui.icon("eco").classes("text-5xl text-green-600")
        ui.label("Sign in to AgriGPT").classes("text-xl font-semibold text-gray-800")
        email = (
            ui.input("Email", value=identity.email or "")
            .props("outlined dense type=email")
            .classes("w-full")
            .on("keydown.enter", sign_in)
        )
        email_error = ui.label("Enter a valid email address").classes("text-xs text-red-600")
        email_error.set_visibility(False)
        ui.button("Continue", on_click=sign_in).props("unelevated color=green-7").classes("w-full")
