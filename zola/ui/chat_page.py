"""NiceGUI chat interface with plain-text streaming and PDF attachments."""

from nicegui import app, events, ui

from zola.client.config import get_client_config
from zola.client.controller import ChatController
from zola.client.notifications import NotificationBanner
from zola.client.relay_client import RelayClient
from zola.client.session import ChatSession
from zola.models.schemas import Message, NotificationKind, Sender
from zola.parsing.pdf_parser import get_pdf_extractor
from zola.ui import STATIC_DIR

BACKGROUND_URL = "/static/background.svg"


def banner_icon(kind: NotificationKind | None) -> str:
    return "check_circle" if kind is NotificationKind.SUCCESS else "cancel"


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    .backdrop {
        position: fixed; inset: 0; z-index: 0;
        background-size: cover; background-position: center;
        filter: blur(6px); opacity: 0.9;
    }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
        position: relative; z-index: 1;
    }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .message-assistant {
        background: #e5e7eb;
        color: #111827;
        border-radius: 18px 18px 18px 4px;
    }

    .message-failed { background: #fee2e2; color: #991b1b; }

    .message-assistant p { margin: 0; }
    .message-assistant pre { margin: 0.5rem 0; }

    .banner { position: fixed; top: 1rem; right: 1rem; z-index: 20; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page. One session per browser tab."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    session = ChatSession(greeting=config.greeting, history_limit=config.history_limit)
    banner = NotificationBanner(duration=config.notification_seconds)

    messages_container: ui.column
    files_container: ui.column
    input_field: ui.input
    reply_labels: dict[str, ui.markdown] = {}

    def render_message(msg: Message) -> None:
        is_user = msg.sender is Sender.USER
        if not is_user and not msg.content:
            # Empty placeholder; the typing row stands in for it
            return
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        if msg.failed:
            bubble += " message-failed"

        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"px-4 py-3 max-w-[75%] shadow-sm {bubble}"):
                if is_user:
                    ui.label(msg.content).classes("text-sm")
                else:
                    reply_labels[msg.id] = ui.markdown(msg.content).classes("text-sm")
                if msg.failed and controller.can_retry:
                    ui.button("Retry", icon="refresh", on_click=controller.retry).props(
                        "flat dense size=sm color=negative"
                    )

    def refresh_messages() -> None:
        reply_labels.clear()
        messages_container.clear()
        with messages_container:
            for msg in session.messages:
                render_message(msg)
            if session.is_typing:
                with ui.row().classes("w-full justify-start"):
                    ui.label("Bot is typing...").classes(
                        "message-assistant px-4 py-3 text-sm italic"
                    )

    def update_reply(msg: Message) -> None:
        label = reply_labels.get(msg.id)
        if label is None:
            refresh_messages()
        else:
            label.set_content(msg.content)

    def refresh_files() -> None:
        files_container.clear()
        with files_container:
            for uploaded in session.uploaded_files:
                with ui.row().classes(
                    "w-full items-center justify-between bg-gray-100 px-3 py-2 rounded-lg"
                ):
                    with ui.row().classes("items-center gap-2"):
                        ui.icon("attach_file").classes("text-gray-500")
                        ui.label(uploaded.name).classes("text-sm text-gray-700 truncate")
                    ui.button(
                        icon="close",
                        on_click=lambda _, name=uploaded.name: controller.remove_file(name),
                    ).props("flat round dense size=sm color=grey")

    controller = ChatController(
        session=session,
        relay=RelayClient(config),
        extractor=get_pdf_extractor(),
        banner=banner,
        on_messages=refresh_messages,
        on_chunk=update_reply,
        on_files=refresh_files,
    )

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_busy:
            return
        input_field.value = ""
        await controller.send(text)

    async def handle_uploads(e: events.MultiUploadEventArguments) -> None:
        await controller.upload_files(e.files)
        uploader.reset()

    # === UI Layout ===
    ui.element("div").classes("backdrop").style(f"background-image: url('{BACKGROUND_URL}')")

    with (
        ui.row()
        .classes("banner bg-white rounded-xl px-4 py-2 shadow-lg items-center gap-2")
        .bind_visibility_from(banner, "visible")
    ):
        ui.icon("info").classes("text-xl").bind_name_from(banner, "kind", banner_icon)
        ui.label().bind_text_from(banner, "message").classes("text-sm font-medium text-gray-800")

    with ui.column().classes("w-full max-w-2xl mx-auto p-4 gap-4").style(
        "height: 100vh; position: relative; z-index: 1"
    ):
        ui.label("Ask ZOLA - Your AI Assistant").classes(
            "w-full text-3xl font-bold text-center text-white"
        )
        with ui.column().classes("w-full flex-grow app-container gap-0"):
            with (
                ui.scroll_area().classes("flex-grow w-full"),
                ui.column().classes("w-full p-4"),
            ):
                messages_container = ui.column().classes("w-full gap-3")
                refresh_messages()

            with ui.column().classes("w-full p-4 gap-2 border-t bg-white/90"):
                files_container = ui.column().classes("w-full gap-1")
                refresh_files()

                with ui.row().classes("w-full items-center gap-2 no-wrap"):
                    uploader = (
                        ui.upload(multiple=True, auto_upload=True, on_multi_upload=handle_uploads)
                        .props("accept=.pdf,application/pdf flat dense hide-upload-btn")
                        .classes("hidden")
                    )
                    ui.button(
                        icon="attach_file",
                        on_click=lambda: uploader.run_method("pickFiles"),
                    ).props("flat round color=grey").tooltip("Attach PDF")
                    input_field = (
                        ui.input(placeholder="Type your message...")
                        .props("outlined dense")
                        .classes("flex-grow")
                        .on("keydown.enter", send_message)
                    )
                    ui.button("Send", on_click=send_message).props("unelevated")
                    ui.button("Clear Chat", on_click=controller.clear).props("outline")


def main() -> None:
    app.add_static_files("/static", STATIC_DIR)
    get_pdf_extractor()
    ui.run(title="Ask ZOLA", port=8080, reload=False)


if __name__ == "__main__":
    main()
