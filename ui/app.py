#!/usr/bin/env python3
import threading

import flet as ft

import ui_config as cfg
import ui_documents as docs
import ui_filepicker as filepicker_utils
import ui_flet
import ui_markdown
import ui_shell
import ui_style as style
import ui_text as text
import view_chat
import view_context
from chat_controller import ChatSession, Message, MessageKind
from ui_context import ContextStore
from ui_errors import ChatRejected, ContextIndexError
from ui_model_client import ModelClient
from ui_prompt import estimate_tokens


COLORS = style.COLORS
_ui_call = ui_flet.ui_call
_safe_update = ui_flet.safe_update


def main(page: ft.Page):
    page.title = cfg.APP_TITLE
    try:
        page.window.width = 1200
        page.window.height = 800
        page.window.min_width = 900
        page.window.min_height = 600
    except AttributeError:
        page.window_width = 1200
        page.window_height = 800
    page.theme_mode = ft.ThemeMode.DARK
    page.bgcolor = style.BG
    page.padding = 0

    client = ModelClient()
    session = ChatSession(ContextStore(), default_model=cfg.DEFAULT_MODEL)
    cfg.debug_log("app", f"model server {client.host}, default model {cfg.DEFAULT_MODEL}")

    def show_snack(message, color=style.ACCENT):
        page.snack_bar = ft.SnackBar(ft.Text(message, color=style.TEXT_PRIMARY), bgcolor=color)
        page.snack_bar.open = True
        page.update()

    def open_markdown_link(e):
        url = getattr(e, "data", None) or ""
        if not url:
            return
        try:
            page.launch_url(url)
        except Exception as exc:
            show_snack(f"Unable to open link: {exc}", style.DANGER)

    # chat

    chat_list = ft.ListView(expand=True, spacing=10, padding=16, auto_scroll=True)
    empty_state = view_chat.build_welcome(COLORS)

    input_field = ft.TextField(
        hint_text="Ask a question about your documents...",
        multiline=True,
        shift_enter=True,
        min_lines=1,
        max_lines=5,
        expand=True,
        filled=True,
        bgcolor=style.SURFACE,
        border_color=style.BORDER,
        focused_border_color=style.BORDER,
        text_style=ft.TextStyle(color=style.TEXT_PRIMARY),
        hint_style=ft.TextStyle(color=style.TEXT_MUTED),
        border_radius=16,
    )
    send_button = ft.IconButton(
        icon=ft.icons.SEND,
        tooltip="Send",
        disabled=True,
        icon_color=style.SURFACE,
        bgcolor=style.ACCENT,
    )

    def build_bubble(message: Message) -> ft.Control:
        bg, fg = style.bubble_colors(message.kind)
        body = ui_markdown.render_message_body(
            page=page,
            message=message,
            open_link_handler=open_markdown_link,
            show_snack=show_snack,
            colors=dict(COLORS, TEXT_PRIMARY=fg),
        )
        bubble = ft.Container(
            bgcolor=bg,
            border_radius=14,
            padding=12,
            border=ft.border.all(1, style.BORDER),
            content=body,
        )
        if message.kind is MessageKind.USER:
            footer = ft.Text(f"~{estimate_tokens(message.content, cfg.CHARS_PER_TOKEN)} tok", size=10, color=style.TEXT_MUTED)
            return ft.Row(
                [ft.Container(width=min(cfg.CHAT_MAX_WIDTH, 600), content=ft.Column([bubble, footer], spacing=4, horizontal_alignment=ft.CrossAxisAlignment.END))],
                alignment=ft.MainAxisAlignment.END,
            )
        if message.kind is MessageKind.SYSTEM:
            bubble.border = None
            bubble.padding = ft.padding.symmetric(horizontal=12, vertical=6)
            return ft.Row([ft.Container(width=320, content=bubble)], alignment=ft.MainAxisAlignment.CENTER)
        return ft.Row([ft.Container(width=cfg.CHAT_MAX_WIDTH, content=bubble)], alignment=ft.MainAxisAlignment.START)

    def update_send_state(_=None):
        _ui_call(page, refresh_send_button)

    def refresh_send_button():
        has_message = bool((input_field.value or "").strip())
        send_button.disabled = (not has_message) or session.in_flight
        send_button.bgcolor = style.BORDER if send_button.disabled else style.ACCENT
        send_button.icon_color = style.TEXT_MUTED if send_button.disabled else style.SURFACE
        _safe_update(send_button)

    def render_transcript():
        chat_list.controls = [build_bubble(m) for m in session.transcript]
        empty_state.visible = not session.transcript
        update_send_state()
        page.update()

    def send_message(_=None):
        question = (input_field.value or "").strip()
        try:
            session.submit_in_background(question, client)
        except ChatRejected as exc:
            cfg.debug_log("chat", f"rejected: {exc}")
            update_send_state()
            return

        def clear_input():
            input_field.value = ""
            update_send_state()
            page.update()

        _ui_call(page, clear_input)

    session.on_change = lambda _s: _ui_call(page, render_transcript)
    input_field.on_change = update_send_state
    input_field.on_submit = send_message
    send_button.on_click = send_message

    # context

    file_count_label = ft.Text(text.files_loaded_label(0), size=12, color=style.TEXT_MUTED)
    total_size_label = ft.Text(text.format_bytes(0), size=12, color=style.TEXT_MUTED)
    files_list = ft.ListView(expand=True, spacing=8)
    loading_label = ft.Text("", size=11, color=style.TEXT_MUTED)
    loading_row = ft.Row([ft.ProgressRing(width=14, height=14, stroke_width=2, color=style.ACCENT), loading_label], spacing=8, visible=False)

    secondary_button_style = ft.ButtonStyle(
        color=style.TEXT_PRIMARY,
        bgcolor=style.SURFACE,
        shape=ft.RoundedRectangleBorder(radius=12),
        side=ft.BorderSide(1, style.BORDER),
    )
    select_files_button = ft.OutlinedButton("Select files", icon=ft.icons.UPLOAD_FILE, style=secondary_button_style)
    select_folder_button = ft.OutlinedButton("Select folder", icon=ft.icons.FOLDER_OPEN, style=secondary_button_style)
    clear_button = ft.TextButton("Clear context", icon=ft.icons.DELETE_SWEEP_OUTLINED, disabled=True)

    def remove_file(index: int):
        try:
            session.remove_context(index)
        except ContextIndexError as exc:
            print(f"[context] {exc}")
        update_context_display()

    def render_context():
        store = session.store
        file_count_label.value = text.files_loaded_label(store.count)
        total_size_label.value = text.format_bytes(store.total_size())
        if store.count:
            files_list.controls = [
                view_context.build_file_card(item=item, index=idx, on_remove=remove_file, colors=COLORS)
                for idx, item in enumerate(store.items)
            ]
        else:
            files_list.controls = [view_context.build_empty_state(COLORS)]
        clear_button.disabled = not store.count
        page.update()

    def update_context_display():
        _ui_call(page, render_context)

    def set_loading(message: str | None):
        loading_label.value = message or ""
        loading_row.visible = bool(message)
        select_files_button.disabled = bool(message)
        select_folder_button.disabled = bool(message)
        page.update()

    def process_paths(paths: list[str]):
        if not paths:
            return
        set_loading("Processing files...")
        try:
            report = docs.load_context_items(paths)
            session.add_context(report.items, skipped=len(report.failures), empty=len(report.empty))
        except Exception as exc:
            print(f"[documents] error processing files: {exc}")
            session.report_error(f"Error processing files: {exc}")
        finally:
            set_loading(None)
        update_context_display()

    def handle_files(result):
        paths, errors = filepicker_utils.normalize_file_picker_result(result)
        for err in errors:
            print(f"[filepicker] {err}")
        if errors:
            session.report_error(f"Error selecting files: {len(errors)} item(s) had no readable path.")
        process_paths(paths)

    def handle_folder(result):
        path = getattr(result, "path", None)
        if path:
            process_paths([path])

    file_picker = ft.FilePicker(on_result=handle_files)
    dir_picker = ft.FilePicker(on_result=handle_folder)
    page.overlay.extend([file_picker, dir_picker])

    select_files_button.on_click = lambda _: file_picker.pick_files(
        dialog_title="Select documents",
        allow_multiple=True,
        file_type=ft.FilePickerFileType.CUSTOM,
        allowed_extensions=filepicker_utils.allowed_extensions(),
    )
    select_folder_button.on_click = lambda _: dir_picker.get_directory_path(dialog_title="Select folder")

    def clear_context(_=None):
        session.clear_context()
        update_context_display()

    clear_button.on_click = clear_context

    # models

    model_dropdown = ft.Dropdown(
        width=240,
        dense=True,
        value=session.selected_model,
        options=[ft.dropdown.Option(session.selected_model)],
    )
    connection_dot = ft.Container(width=12, height=12, bgcolor=style.connection_color("checking"), border_radius=6)
    connection_label = ft.Text("Checking connection...", size=12, color=style.TEXT_MUTED)

    def set_connection(status: str, label: str):
        connection_dot.bgcolor = style.connection_color(status)
        connection_label.value = label
        page.update()

    def refresh_models(_=None):
        status = session.refresh_models(client)
        cfg.debug_log("models", status)
        names = session.available_models or [session.selected_model]
        model_dropdown.options = [ft.dropdown.Option(name) for name in names]
        model_dropdown.value = session.selected_model
        model_dropdown.tooltip = status
        page.update()

    def on_model_change(_=None):
        session.select_model(model_dropdown.value)
        cfg.debug_log("models", f"selected {session.selected_model}")

    def check_connection():
        set_connection("checking", "Checking connection...")
        ok, label = session.check_connection(client)
        set_connection("connected" if ok else "disconnected", label)

    model_dropdown.on_change = on_model_change
    refresh_models_button = ft.IconButton(icon=ft.icons.REFRESH, tooltip="Reload models", icon_color=style.TEXT_MUTED, on_click=refresh_models)

    # layout

    context_panel = view_context.build_context_panel(
        select_files_button=select_files_button,
        select_folder_button=select_folder_button,
        clear_button=clear_button,
        file_count_label=file_count_label,
        total_size_label=total_size_label,
        files_list=ft.Column([loading_row, files_list], expand=True, spacing=8),
        colors=COLORS,
    )
    chat_tab = view_chat.build_chat_tab(
        chat_list=chat_list,
        empty_state=empty_state,
        input_field=input_field,
        send_button=send_button,
        colors=COLORS,
    )
    shell = ui_shell.build_shell(
        app_title=cfg.APP_TITLE,
        colors=COLORS,
        sidebar_width=cfg.SIDEBAR_WIDTH,
        context_panel=context_panel,
        chat_tab=chat_tab,
        model_dropdown=model_dropdown,
        refresh_models_button=refresh_models_button,
        connection_dot=connection_dot,
        connection_label=connection_label,
    )
    page.add(shell["root_control"])

    update_context_display()
    render_transcript()

    def startup():
        check_connection()
        refresh_models()

    threading.Thread(target=startup, daemon=True).start()


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
