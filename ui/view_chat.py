import flet as ft


def build_welcome(colors: dict) -> ft.Control:
    return ft.Container(
        alignment=ft.alignment.center,
        expand=True,
        content=ft.Column(
            [
                ft.Text("Chat with your documents", size=20, weight=ft.FontWeight.W_700, color=colors.get("TEXT_PRIMARY")),
                ft.Text(
                    "Load files on the left, pick a model, and ask a question.",
                    size=13,
                    color=colors.get("TEXT_MUTED"),
                ),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            tight=True,
            spacing=8,
        ),
    )


def build_chat_tab(*, chat_list: ft.Control, empty_state: ft.Control, input_field: ft.Control, send_button: ft.Control, colors: dict) -> ft.Control:
    composer = ft.Container(
        padding=ft.padding.symmetric(horizontal=16, vertical=12),
        bgcolor=colors.get("SURFACE_ALT"),
        border=ft.border.only(top=ft.BorderSide(1, colors.get("BORDER"))),
        content=ft.Row([input_field, send_button], spacing=8, vertical_alignment=ft.CrossAxisAlignment.END),
    )
    chat_area = ft.Stack([chat_list, empty_state], expand=True)
    return ft.Column([chat_area, composer], expand=True, spacing=0)
