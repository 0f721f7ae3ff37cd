"""Unit tests for the Composer component state.

The composer is exercised without rendering; send events are captured by
plain recording callbacks.
"""

import pytest

from agrigpt.models.schemas import ImageFile
from agrigpt.ui.composer import MAX_INPUT_HEIGHT, Composer, input_height


class Recorder:
    def __init__(self) -> None:
        self.texts: list[str] = []
        self.images: list[tuple[ImageFile, str | None]] = []

    async def send_text(self, text: str) -> None:
        self.texts.append(text)

    async def send_image(self, file: ImageFile, caption: str | None) -> None:
        self.images.append((file, caption))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def composer(recorder, previews, speech, notifier) -> Composer:
    return Composer(
        on_send_text=recorder.send_text,
        on_send_image=recorder.send_image,
        previews=previews,
        speech=speech,
        notifier=notifier,
    )


class TestInputHeight:
    """Auto-grow sizing of the input box."""

    def test_empty_draft_uses_automatic_size(self) -> None:
        assert input_height("") is None

    def test_grows_with_lines(self) -> None:
        assert input_height("a\nb\nc") > input_height("a")

    def test_capped_at_maximum(self) -> None:
        assert input_height("line\n" * 50) == MAX_INPUT_HEIGHT

    def test_set_text_updates_height_and_clears_it(self, composer: Composer) -> None:
        composer.set_text("first\nsecond")
        assert composer.height is not None

        composer.set_text("")
        assert composer.height is None


class TestSubmitText:
    """Tests for text submission."""

    async def test_sends_trimmed_text_and_clears_draft(
        self, composer: Composer, recorder: Recorder
    ) -> None:
        composer.set_text("  How to control aphids?  ")

        await composer.submit_text()

        assert recorder.texts == ["How to control aphids?"]
        assert composer.text == ""
        assert composer.height is None

    async def test_whitespace_draft_is_ignored(
        self, composer: Composer, recorder: Recorder
    ) -> None:
        composer.set_text("   \n  ")

        await composer.submit_text()

        assert recorder.texts == []
        assert composer.text == "   \n  "

    async def test_disabled_composer_does_not_send(
        self, composer: Composer, recorder: Recorder
    ) -> None:
        composer.set_text("hello")
        composer.set_disabled(True)

        await composer.submit_text()

        assert recorder.texts == []
        assert composer.text == "hello"

    async def test_enter_submits(self, composer: Composer, recorder: Recorder) -> None:
        composer.set_text("hello")

        consumed = await composer.handle_enter(shift_key=False)

        assert consumed is True
        assert recorder.texts == ["hello"]

    async def test_shift_enter_does_not_submit(
        self, composer: Composer, recorder: Recorder
    ) -> None:
        composer.set_text("hello")

        consumed = await composer.handle_enter(shift_key=True)

        assert consumed is False
        assert recorder.texts == []
        assert composer.text == "hello"

    async def test_plain_callbacks_are_supported(self, previews, speech, notifier) -> None:
        """Synchronous send handlers work as well as coroutines."""
        sent: list[str] = []
        composer = Composer(
            on_send_text=sent.append,
            on_send_image=lambda file, caption: None,
            previews=previews,
            speech=speech,
            notifier=notifier,
        )
        composer.set_text("sync")

        await composer.submit_text()

        assert sent == ["sync"]


class TestAttachments:
    """Preview handles are released exactly once on every path."""

    def test_choose_creates_preview(
        self, composer: Composer, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)

        assert composer.attachment is not None
        assert composer.attachment.file == sample_image
        assert previews.is_live(composer.attachment.preview_url)

    def test_choosing_again_releases_previous_handle_once(
        self, composer: Composer, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)
        first = composer.attachment.preview_url

        composer.choose_attachment(sample_image)

        assert previews.released == [first]
        assert composer.attachment.preview_url != first
        assert previews.live_count == 1

    def test_retake_releases_and_clears(
        self, composer: Composer, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)
        url = composer.attachment.preview_url

        composer.retake()

        assert composer.attachment is None
        assert previews.released == [url]
        assert previews.live_count == 0

    def test_retake_without_attachment_is_noop(self, composer: Composer, previews) -> None:
        composer.retake()

        assert previews.released == []

    async def test_confirm_sends_image_with_caption(
        self, composer: Composer, recorder: Recorder, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)
        url = composer.attachment.preview_url
        composer.set_text("  yellow spots on leaves ")

        await composer.confirm_attachment()

        assert recorder.images == [(sample_image, "yellow spots on leaves")]
        assert composer.attachment is None
        assert composer.text == ""
        assert previews.released == [url]

    async def test_confirm_without_text_sends_no_caption(
        self, composer: Composer, recorder: Recorder, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)

        await composer.confirm_attachment()

        assert recorder.images == [(sample_image, None)]

    async def test_confirm_without_attachment_is_noop(
        self, composer: Composer, recorder: Recorder
    ) -> None:
        await composer.confirm_attachment()

        assert recorder.images == []

    async def test_confirm_while_disabled_keeps_attachment(
        self, composer: Composer, recorder: Recorder, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)
        composer.set_disabled(True)

        await composer.confirm_attachment()

        assert recorder.images == []
        assert composer.attachment is not None
        assert previews.released == []

    def test_clear_releases_attachment_and_draft(
        self, composer: Composer, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)
        composer.set_text("draft")

        composer.clear()

        assert composer.attachment is None
        assert composer.text == ""
        assert previews.live_count == 0
        assert len(previews.released) == 1

    def test_topic_without_images_drops_attachment(
        self, composer: Composer, previews, sample_image: ImageFile
    ) -> None:
        composer.choose_attachment(sample_image)

        composer.configure(allow_images=False, placeholder_key="schemesPlaceholder")

        assert composer.attachment is None
        assert previews.live_count == 0


class TestDictation:
    """Tests for voice dictation."""

    async def test_unsupported_shows_notice_and_keeps_draft(
        self, composer: Composer, speech, notifier
    ) -> None:
        speech.supported = False
        composer.set_text("draft")

        await composer.toggle_dictation()

        assert composer.text == "draft"
        assert composer.is_listening is False
        assert speech.started == []
        assert notifier.notices == [("Voice input is not supported in this browser.", "warning")]

    async def test_starts_with_mapped_locale(self, composer: Composer, speech) -> None:
        composer.set_language("hi")

        await composer.toggle_dictation()

        assert speech.started == ["hi-IN"]
        assert composer.is_listening is True

    async def test_unmapped_language_falls_back(self, composer: Composer, speech) -> None:
        composer.language = "fr"

        await composer.toggle_dictation()

        assert speech.started == ["en-US"]

    async def test_transcript_appended_with_space(self, composer: Composer, speech) -> None:
        composer.set_text("My lemon tree")
        await composer.toggle_dictation()

        speech.on_result("has yellow leaves")

        assert composer.text == "My lemon tree has yellow leaves"
        assert composer.height is not None

    async def test_transcript_into_empty_draft(self, composer: Composer, speech) -> None:
        await composer.toggle_dictation()

        speech.on_result("aphids on citrus")

        assert composer.text == "aphids on citrus"

    async def test_toggle_again_stops(self, composer: Composer, speech) -> None:
        await composer.toggle_dictation()

        await composer.toggle_dictation()

        assert speech.stop_calls == 1
        assert composer.is_listening is False

    async def test_end_and_error_reset_listening(self, composer: Composer, speech) -> None:
        await composer.toggle_dictation()
        speech.on_end("no-speech")
        assert composer.is_listening is False

        await composer.toggle_dictation()
        speech.on_end(None)
        assert composer.is_listening is False


class FakeControl:
    """Stands in for a rendered NiceGUI element."""

    def __init__(self) -> None:
        self.enabled = True

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def props(self, add: str) -> None:
        pass


class TestControls:
    """Enabled state of the rendered controls."""

    def test_disabling_covers_every_control(self, composer: Composer) -> None:
        """Photo buttons are disabled together with the input, mic and send."""
        controls = [FakeControl() for _ in range(5)]
        composer._textarea, composer._send_button, composer._mic_button = controls[:3]
        composer._attach_buttons = controls[3:]

        composer.set_disabled(True)

        assert [c.enabled for c in controls] == [False] * 5

        composer.set_disabled(False)

        assert [c.enabled for c in controls] == [True] * 5
