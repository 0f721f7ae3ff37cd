"""Speech recognition port and its browser implementation.

The composer only talks to a ``SpeechRecognizer``. In the app that is
``BrowserSpeechRecognizer``, which drives the Web Speech API through
NiceGUI's JavaScript bridge.
"""

import itertools
import json
import logging
from collections.abc import Callable
from typing import Protocol

from nicegui import ui

logger = logging.getLogger(__name__)

SPEECH_LOCALES = {
    "en": "en-US",
    "hi": "hi-IN",
    "te": "te-IN",
}
DEFAULT_SPEECH_LOCALE = "en-US"

_RESULT_EVENT = "agrigpt_speech_result"
_END_EVENT = "agrigpt_speech_end"


def speech_locale(language: str | None) -> str:
    """Map a two-letter UI language to a recognizer locale tag."""
    return SPEECH_LOCALES.get((language or "").lower(), DEFAULT_SPEECH_LOCALE)


class SpeechRecognizer(Protocol):
    """Capability used by the composer for voice dictation."""

    async def is_supported(self) -> bool: ...

    def start(
        self,
        locale: str,
        on_result: Callable[[str], None],
        on_end: Callable[[str | None], None],
    ) -> None:
        """Start one single-shot recognition.

        ``on_result`` receives the transcript. ``on_end`` is called once the
        session finishes, with an error code if it failed.
        """
        ...

    def stop(self) -> None: ...


_DETECT_JS = "!!(window.SpeechRecognition || window.webkitSpeechRecognition)"

_START_JS = """
(() => {
  const Recognition = window.SpeechRecognition || window.webkitSpeechRecognition;
  const recognition = new Recognition();
  recognition.lang = %(locale)s;
  recognition.interimResults = false;
  recognition.maxAlternatives = 1;
  recognition.onresult = (event) => {
    emitEvent('%(result)s', {id: %(id)d, transcript: event.results[0][0].transcript});
  };
  recognition.onerror = (event) => emitEvent('%(end)s', {id: %(id)d, error: event.error});
  recognition.onend = () => emitEvent('%(end)s', {id: %(id)d});
  window.__agrigptRecognition = recognition;
  recognition.start();
})();
"""

_STOP_JS = "window.__agrigptRecognition && window.__agrigptRecognition.stop();"


class BrowserSpeechRecognizer:
    """Web Speech API recognizer running in the connected browser.

    Must be created inside a NiceGUI page so event listeners attach to the
    right client. Each ``start`` gets a new id; browser events carrying an
    older id belong to an abandoned recognition and are ignored.
    """

    def __init__(self) -> None:
        self._on_result: Callable[[str], None] | None = None
        self._on_end: Callable[[str | None], None] | None = None
        self._ids = itertools.count(1)
        self._session_id: int | None = None
        ui.on(_RESULT_EVENT, self._handle_result)
        ui.on(_END_EVENT, self._handle_end)

    async def is_supported(self) -> bool:
        try:
            return bool(await ui.run_javascript(_DETECT_JS))
        except TimeoutError:
            logger.warning("Browser did not answer speech capability check")
            return False

    def start(self, locale, on_result, on_end) -> None:
        self._on_result = on_result
        self._on_end = on_end
        self._session_id = next(self._ids)
        ui.run_javascript(
            _START_JS
            % {
                "locale": json.dumps(locale),
                "result": _RESULT_EVENT,
                "end": _END_EVENT,
                "id": self._session_id,
            }
        )

    def stop(self) -> None:
        ui.run_javascript(_STOP_JS)

    def _is_current(self, args: dict) -> bool:
        if self._session_id is not None and args.get("id") == self._session_id:
            return True
        logger.debug(f"Ignoring speech event for recognition {args.get('id')}")
        return False

    def _handle_result(self, e) -> None:
        args = e.args or {}
        if not self._is_current(args):
            return
        transcript = args.get("transcript", "")
        if transcript and self._on_result is not None:
            self._on_result(transcript)

    def _handle_end(self, e) -> None:
        args = e.args or {}
        if not self._is_current(args):
            return
        self._session_id = None
        on_end, self._on_end = self._on_end, None
        self._on_result = None
        if on_end is not None:
            on_end(args.get("error"))
