"""NiceGUI chat page for the AgriGPT advisory assistant."""

from datetime import datetime

from nicegui import app, ui

from agrigpt.backend.client import BackendClient
from agrigpt.chat.attachments import PreviewStore
from agrigpt.chat.identity import StorageIdentity, UiNotifier
from agrigpt.chat.session import ChatSession
from agrigpt.chat.speech import BrowserSpeechRecognizer
from agrigpt.config import get_client_config
from agrigpt.models.schemas import ImageFile, Message, Topic
from agrigpt.ui.composer import Composer
from agrigpt.ui.strings import LANGUAGE_NAMES, translate

LANGUAGE_KEY = "lang"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9fafb; }

    .header { background: white; border-bottom: 1px solid #f3f4f6; }

    .message-user {
        background: white;
        border: 1px solid #e5e7eb;
        color: #1f2937;
        border-radius: 18px 4px 18px 18px;
    }

    .message-assistant {
        background: white;
        border: 1px solid #f3f4f6;
        color: #1f2937;
        border-radius: 4px 18px 18px 18px;
    }

    .avatar-user { background: #e5e7eb; }
    .avatar-assistant { background: #dcfce7; border: 1px solid #bbf7d0; }

    .input-box {
        background: white;
        border: 2px solid #22c55e;
        border-radius: 24px;
        transition: box-shadow 0.2s;
    }
    .input-box:focus-within { box-shadow: 0 0 0 3px rgba(187, 247, 208, 0.6); }

    .send-btn { background: #16a34a !important; color: white !important; }

    .suggestion {
        border: 1px solid #e5e7eb;
        border-radius: 9999px;
        background: white;
    }
    .suggestion:hover { border-color: #22c55e; background: #f0fdf4; }

    .message-assistant p { margin: 0.25rem 0; }
</style>
"""


def format_time(timestamp: str) -> str:
    """Render an ISO timestamp as local clock time."""
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%I:%M %p")
    except ValueError:
        return ""


def placeholder_key(topic: Topic) -> str:
    return "schemesPlaceholder" if topic is Topic.GOVERNMENT_SCHEMES else "inputPlaceholder"


@ui.page("/")
def chat_page(topic: str | None = None) -> None:
    """Main chat page.

    Args:
        topic: Optional topic name from the query string; opens the page on
            that topic with a fresh conversation.
    """
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    identity = StorageIdentity()
    notifier = UiNotifier()
    previews = PreviewStore()
    language = app.storage.user.get(LANGUAGE_KEY, config.default_language)

    session = ChatSession(
        backend=BackendClient(config),
        identity=identity,
        notifier=notifier,
        topic=Topic.parse(topic) or Topic.CITRUS_CROP,
    )

    async def send_text(text: str) -> None:
        await session.submit(text)

    async def send_image(file: ImageFile, caption: str | None) -> None:
        await session.submit(caption, file)

    composer = Composer(
        on_send_text=send_text,
        on_send_image=send_image,
        previews=previews,
        speech=BrowserSpeechRecognizer(),
        notifier=notifier,
        language=language,
        max_image_bytes=config.max_image_bytes,
    )
    composer.configure(session.topic.accepts_images, placeholder_key(session.topic))
    session.on_reset(composer.clear)
    ui.context.client.on_delete(composer.clear)

    messages_container: ui.column
    scroll_area: ui.scroll_area
    expanded = ui.dialog()
    with expanded, ui.card().classes("p-2 bg-black"):
        expanded_image = ui.image().classes("max-w-[90vw] max-h-[85vh]")

    def show_image(source: str) -> None:
        expanded_image.set_source(source)
        expanded.open()

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "auto_awesome"
        color = "text-gray-600" if is_user else "text-green-600"
        with ui.element("div").classes(
            f"w-8 h-8 rounded-full flex items-center justify-center shrink-0 {css}"
        ):
            ui.icon(icon).classes(f"{color} text-base")

    def render_message(msg: Message) -> None:
        align = "justify-end" if msg.is_user else "justify-start"
        bubble = "message-user" if msg.is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-start no-wrap"):
            if not msg.is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[85%] gap-1"):
                with ui.element("div").classes(f"px-5 py-3 shadow-sm {bubble}"):
                    if msg.image:
                        ui.image(msg.image).classes(
                            "w-48 max-h-48 rounded-lg mb-2 cursor-pointer"
                        ).on("click", lambda src=msg.image: show_image(src))
                    if msg.is_user:
                        ui.label(msg.text).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.markdown(msg.text).classes("text-sm leading-relaxed")
                ui.label(format_time(msg.timestamp)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if msg.is_user else 'self-start'}"
                )
            if msg.is_user:
                render_avatar(True)

    def render_welcome() -> None:
        with ui.column().classes("w-full items-center justify-center gap-5 py-10 text-center"):
            with ui.element("div").classes(
                "w-16 h-16 rounded-full flex items-center justify-center avatar-assistant"
            ):
                ui.icon("auto_awesome").classes("text-green-600 text-3xl")
            ui.label(translate("welcome", composer.language)).classes(
                "text-2xl font-bold text-gray-800"
            )
            ui.label(
                translate("welcomeHint", composer.language, topic=session.topic.value)
            ).classes("text-sm text-gray-600 max-w-md")
            with ui.row().classes("gap-3 justify-center"):
                for suggestion in session.suggestions:
                    ui.button(
                        suggestion,
                        on_click=lambda s=suggestion: session.submit(s),
                    ).props("flat no-caps color=grey-9").classes("suggestion px-4 text-sm")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                render_welcome()
            else:
                for msg in session.messages:
                    render_message(msg)
                if session.is_submitting:
                    ui.label(translate("thinking", composer.language)).classes(
                        "w-full text-center text-xs text-gray-400 animate-pulse"
                    )
        composer.set_disabled(session.is_submitting)
        scroll_area.scroll_to(percent=1.0)

    def select_topic(selected: Topic) -> None:
        session.switch_topic(selected)
        composer.configure(selected.accepts_images, placeholder_key(selected))
        topic_label.set_text(f"{selected.icon} {selected.value}")
        sidebar_topics.refresh()

    def set_language(value: str) -> None:
        app.storage.user[LANGUAGE_KEY] = value
        composer.set_language(value)
        sidebar_labels.refresh()
        refresh_messages()

    def sign_out() -> None:
        identity.sign_out()
        session.start_new_chat()
        ui.navigate.to("/login")

    # === Sidebar ===
    with ui.left_drawer(value=True).classes("bg-gray-50 border-r") as drawer:

        @ui.refreshable
        def sidebar_labels() -> None:
            ui.button(
                translate("newChat", composer.language),
                icon="add",
                on_click=session.start_new_chat,
            ).props("outline color=green-7 no-caps").classes("w-full")
            ui.label(translate("topics", composer.language)).classes(
                "text-xs uppercase text-gray-400 mt-4"
            )
            sidebar_topics()
            ui.space()
            if identity.email:
                ui.label(identity.email).classes("text-xs text-gray-500 truncate")
                ui.button(
                    translate("signOut", composer.language), icon="logout", on_click=sign_out
                ).props("flat dense no-caps color=grey-8")
            else:
                ui.button(
                    translate("signIn", composer.language),
                    icon="login",
                    on_click=lambda: ui.navigate.to("/login"),
                ).props("flat dense no-caps color=green-7")

        @ui.refreshable
        def sidebar_topics() -> None:
            for option in Topic:
                active = "bg-green-100 text-green-800" if option is session.topic else ""
                ui.button(
                    f"{option.icon} {option.value}",
                    on_click=lambda t=option: select_topic(t),
                ).props("flat no-caps align=left color=grey-9").classes(f"w-full {active}")

        with ui.column().classes("w-full h-full gap-2"):
            sidebar_labels()

    # === Header ===
    with ui.header().classes("header px-4 py-3 items-center justify-between text-gray-800"):
        with ui.row().classes("items-center gap-3"):
            ui.button(icon="menu", on_click=drawer.toggle).props("flat round color=grey-8")
            ui.label("AgriGPT").classes("text-xl font-bold")
        with ui.row().classes("items-center gap-3"):
            ui.select(
                LANGUAGE_NAMES,
                value=composer.language,
                on_change=lambda e: set_language(e.value),
            ).props("dense borderless options-dense")
            with ui.button().props("outline rounded no-caps color=green-7"):
                topic_label = ui.label(f"{session.topic.icon} {session.topic.value}")
                ui.icon("expand_more")
                with ui.menu():
                    for option in Topic:
                        ui.menu_item(
                            f"{option.icon} {option.value}",
                            on_click=lambda t=option: select_topic(t),
                        )

    # === Messages ===
    with ui.column().classes("w-full max-w-3xl mx-auto").style("height: calc(100vh - 9rem)"):
        if not identity.email:
            with ui.row().classes("w-full items-center gap-2 bg-amber-50 rounded-lg px-4 py-2"):
                ui.icon("info").classes("text-amber-600")
                ui.label(translate("signedOut", composer.language)).classes("text-sm flex-grow")
                ui.button(
                    translate("signIn", composer.language),
                    on_click=lambda: ui.navigate.to("/login"),
                ).props("flat dense no-caps color=green-7")

        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            messages_container = ui.column().classes("w-full gap-6 p-4")

    # === Input ===
    with ui.footer().classes("bg-white px-4 py-3"):
        with ui.column().classes("w-full max-w-3xl mx-auto"):
            composer.render()

    session.on_change(refresh_messages)
    refresh_messages()
