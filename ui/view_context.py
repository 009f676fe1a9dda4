import flet as ft

import ui_config as cfg
import ui_text as text
from ui_context import ContextItem


def build_file_card(*, item: ContextItem, index: int, on_remove, colors: dict) -> ft.Control:
    return ft.Container(
        padding=10,
        bgcolor=colors.get("SURFACE"),
        border=ft.border.all(1, colors.get("BORDER")),
        border_radius=12,
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text(item.name, size=13, weight=ft.FontWeight.W_600, color=colors.get("TEXT_PRIMARY"), expand=True, no_wrap=True),
                        ft.IconButton(
                            icon=ft.icons.CLOSE,
                            icon_size=16,
                            tooltip="Remove file",
                            icon_color=colors.get("TEXT_MUTED"),
                            on_click=lambda _e, i=index: on_remove(i),
                        ),
                    ],
                    spacing=4,
                    vertical_alignment=ft.CrossAxisAlignment.CENTER,
                ),
                ft.Text(text.format_bytes(item.size), size=11, color=colors.get("TEXT_MUTED")),
                ft.Text(text.truncate_text(item.content, cfg.PREVIEW_CHARS), size=11, color=colors.get("TEXT_MUTED"), max_lines=4),
            ],
            spacing=4,
            tight=True,
        ),
    )


def build_empty_state(colors: dict) -> ft.Control:
    return ft.Container(
        padding=12,
        content=ft.Text(
            "No files loaded. Select files or a folder to add context.",
            size=12,
            color=colors.get("TEXT_MUTED"),
            text_align=ft.TextAlign.CENTER,
        ),
    )


def build_context_panel(
    *,
    select_files_button: ft.Control,
    select_folder_button: ft.Control,
    clear_button: ft.Control,
    file_count_label: ft.Control,
    total_size_label: ft.Control,
    files_list: ft.Control,
    colors: dict,
) -> ft.Control:
    return ft.Column(
        [
            ft.Text("Context", size=14, weight=ft.FontWeight.W_700, color=colors.get("TEXT_PRIMARY")),
            ft.Row([select_files_button, select_folder_button], spacing=8, wrap=True),
            clear_button,
            ft.Row([file_count_label, total_size_label], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            ft.Divider(height=1, color=colors.get("BORDER")),
            files_list,
        ],
        spacing=10,
        expand=True,
    )
