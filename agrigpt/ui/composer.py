"""Composer component: text box, photo capture and voice dictation.

The composer knows nothing about the conversation. It emits two events,
``on_send_text(text)`` and ``on_send_image(file, caption)``, and the page
decides what to do with them. State lives on the ``Composer`` object so it
can be driven without a browser; ``render()`` builds the NiceGUI elements
on top of it.
"""

import inspect
import logging
import math
from collections.abc import Awaitable, Callable

from nicegui import ui

from agrigpt.chat.attachments import PendingAttachment, PreviewStore
from agrigpt.chat.identity import Notifier
from agrigpt.chat.speech import SpeechRecognizer, speech_locale
from agrigpt.models.schemas import ImageFile
from agrigpt.ui.strings import translate

logger = logging.getLogger(__name__)

MAX_INPUT_HEIGHT = 120
LINE_HEIGHT = 20
INPUT_PADDING = 16
CHARS_PER_LINE = 60

SendTextHandler = Callable[[str], Awaitable[object] | object]
SendImageHandler = Callable[[ImageFile, str | None], Awaitable[object] | object]


def input_height(text: str) -> int | None:
    """Pixel height for the input holding ``text``.

    Grows with the number of (wrapped) lines up to ``MAX_INPUT_HEIGHT``.
    Returns None for an empty draft, meaning the browser sizes it.
    """
    if not text:
        return None
    rows = sum(max(1, math.ceil(len(line) / CHARS_PER_LINE)) for line in text.split("\n"))
    return min(rows * LINE_HEIGHT + INPUT_PADDING, MAX_INPUT_HEIGHT)


async def _emit(handler: Callable, *args) -> None:
    result = handler(*args)
    if inspect.isawaitable(result):
        await result


class Composer:
    """Compose box with image attachment and dictation."""

    def __init__(
        self,
        on_send_text: SendTextHandler,
        on_send_image: SendImageHandler,
        previews: PreviewStore,
        speech: SpeechRecognizer,
        notifier: Notifier,
        language: str = "en",
        max_image_bytes: int = 10 * 1024 * 1024,
    ) -> None:
        self._on_send_text = on_send_text
        self._on_send_image = on_send_image
        self._previews = previews
        self._speech = speech
        self._notifier = notifier
        self.language = language
        self.max_image_bytes = max_image_bytes

        self.text: str = ""
        self.height: int | None = None
        self.attachment: PendingAttachment | None = None
        self.is_listening: bool = False
        self.disabled: bool = False
        self.allow_images: bool = True
        self.placeholder_key: str = "inputPlaceholder"

        self._textarea: ui.textarea | None = None
        self._send_button: ui.button | None = None
        self._mic_button: ui.button | None = None
        self._attach_buttons: list[ui.button] = []
        self._tooltips: dict[str, ui.tooltip] = {}

    # --- state operations ---

    def set_text(self, value: str | None) -> None:
        """Update the draft and resize the input to fit it."""
        self.text = value or ""
        self.height = input_height(self.text)
        self._sync_input()

    async def submit_text(self) -> None:
        """Send the trimmed draft as a text message."""
        text = self.text.strip()
        if not text or self.disabled:
            return
        self.set_text("")
        await _emit(self._on_send_text, text)

    async def handle_enter(self, shift_key: bool = False) -> bool:
        """Apply the Enter key contract.

        Enter submits. Shift+Enter is left to the browser, which inserts a
        newline. Returns True if the key was consumed.
        """
        if shift_key:
            return False
        await self.submit_text()
        return True

    def choose_attachment(self, file: ImageFile) -> None:
        """Stage ``file`` for sending, replacing any pending image."""
        self._release_attachment()
        self.attachment = PendingAttachment(preview_url=self._previews.create(file), file=file)
        self._refresh_preview()

    def retake(self) -> None:
        """Discard the pending image."""
        self._release_attachment()
        self._refresh_preview()

    async def confirm_attachment(self) -> None:
        """Send the pending image with the draft as its caption."""
        if self.attachment is None or self.disabled:
            return
        file = self.attachment.file
        caption = self.text.strip() or None
        self._release_attachment()
        self.set_text("")
        self._refresh_preview()
        await _emit(self._on_send_image, file, caption)

    async def toggle_dictation(self) -> None:
        """Start voice dictation, or stop it if it is running."""
        if self.is_listening:
            self._speech.stop()
            self.is_listening = False
            self._refresh_controls()
            return

        if not await self._speech.is_supported():
            self._notifier.notify(translate("micSupported", self.language), kind="warning")
            return

        self.is_listening = True
        self._refresh_controls()
        self._speech.start(
            speech_locale(self.language),
            on_result=self._append_transcript,
            on_end=self._dictation_ended,
        )

    def clear(self) -> None:
        """Drop the draft and any pending image, and stop dictation."""
        if self.is_listening:
            self._speech.stop()
            self.is_listening = False
        self._release_attachment()
        self.set_text("")
        self._refresh_preview()
        self._refresh_controls()

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = disabled
        self._refresh_controls()

    def configure(self, allow_images: bool, placeholder_key: str) -> None:
        """Adapt the composer to the page's active topic."""
        self.allow_images = allow_images
        self.placeholder_key = placeholder_key
        if not allow_images:
            self._release_attachment()
            self._refresh_preview()
        self._apply_labels()

    def set_language(self, language: str) -> None:
        self.language = language
        self._apply_labels()
        self._refresh_preview()

    def _release_attachment(self) -> None:
        if self.attachment is not None:
            self._previews.release(self.attachment.preview_url)
            self.attachment = None

    def _append_transcript(self, transcript: str) -> None:
        self.set_text(f"{self.text} {transcript}" if self.text else transcript)

    def _dictation_ended(self, error: str | None) -> None:
        if error:
            logger.error(f"{translate('voiceError', 'en')} {error}")
        self.is_listening = False
        self._refresh_controls()

    # --- rendering ---

    def render(self) -> None:
        """Build the composer elements in the current NiceGUI context."""
        size_mb = self.max_image_bytes // (1024 * 1024)

        def rejected() -> None:
            self._notifier.notify(translate("imageRejected", self.language, size=size_mb))

        gallery = (
            ui.upload(
                on_upload=self._handle_upload,
                on_rejected=rejected,
                auto_upload=True,
                max_file_size=self.max_image_bytes,
            )
            .props('accept="image/*"')
            .classes("hidden")
        )
        camera = (
            ui.upload(
                on_upload=self._handle_upload,
                on_rejected=rejected,
                auto_upload=True,
                max_file_size=self.max_image_bytes,
            )
            .props('accept="image/*" capture="environment"')
            .classes("hidden")
        )

        with ui.column().classes("w-full gap-2"):
            self._render_preview()

            with ui.row().classes("w-full items-end gap-2 input-box px-2 py-1 no-wrap"):
                with ui.row().classes("gap-0 items-center").bind_visibility_from(
                    self, "allow_images"
                ):
                    with ui.button(
                        icon="photo_camera", on_click=lambda: camera.run_method("pickFiles")
                    ).props("flat round dense color=grey-7") as camera_button:
                        self._tooltips["capturePhoto"] = ui.tooltip("")
                    with ui.button(
                        icon="image", on_click=lambda: gallery.run_method("pickFiles")
                    ).props("flat round dense color=grey-7") as gallery_button:
                        self._tooltips["uploadPhoto"] = ui.tooltip("")
                    self._attach_buttons = [camera_button, gallery_button]
                with ui.button(icon="mic", on_click=self.toggle_dictation).props(
                    "flat round dense color=grey-7"
                ) as self._mic_button:
                    self._tooltips["voiceAssistant"] = ui.tooltip("")

                self._textarea = (
                    ui.textarea(
                        value=self.text,
                        on_change=lambda e: self.set_text(e.value),
                    )
                    .props("borderless dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.exact.prevent", lambda: self.handle_enter(False))
                )

                with ui.button(icon="send", on_click=self.submit_text).props(
                    "round unelevated"
                ).classes("send-btn") as self._send_button:
                    self._tooltips["send"] = ui.tooltip("")

        self._apply_labels()
        self._refresh_controls()

    @ui.refreshable_method
    def _render_preview(self) -> None:
        if self.attachment is None:
            return
        with ui.row().classes("items-center gap-3 bg-white p-2 rounded-lg shadow border"):
            ui.image(self.attachment.preview_url).classes("w-16 h-16 rounded object-cover")
            ui.button(translate("retake", self.language), on_click=self.retake).props(
                "flat dense color=grey-8"
            )
            ui.button(
                translate("usePhoto", self.language), on_click=self.confirm_attachment
            ).props("unelevated dense color=green-7").bind_enabled_from(
                self, "disabled", backward=lambda d: not d
            )

    async def _handle_upload(self, e) -> None:
        content = await e.file.read()
        self.choose_attachment(
            ImageFile(
                name=e.file.name or "photo.jpg",
                content=content,
                content_type=e.file.content_type or "image/jpeg",
            )
        )
        e.sender.reset()

    def _refresh_preview(self) -> None:
        if self._textarea is not None:
            self._render_preview.refresh()

    def _sync_input(self) -> None:
        if self._textarea is None:
            return
        if self._textarea.value != self.text:
            self._textarea.value = self.text
        style = "" if self.height is None else f"height: {self.height}px"
        self._textarea.props["input-style"] = f"{style}; max-height: {MAX_INPUT_HEIGHT}px"
        self._textarea.update()

    def _refresh_controls(self) -> None:
        if self._textarea is None:
            return
        self._textarea.set_enabled(not self.disabled)
        self._send_button.set_enabled(not self.disabled)
        self._mic_button.set_enabled(not self.disabled)
        for button in self._attach_buttons:
            button.set_enabled(not self.disabled)
        self._mic_button.props(f"color={'red' if self.is_listening else 'grey-7'}")

    def _apply_labels(self) -> None:
        if self._textarea is None:
            return
        self._textarea.props["placeholder"] = translate(self.placeholder_key, self.language)
        self._textarea.update()
        for key, tooltip in self._tooltips.items():
            tooltip.set_text(translate(key, self.language))
