import flet as ft


def build_shell(
    *,
    app_title: str,
    colors: dict,
    sidebar_width: int,
    context_panel: ft.Control,
    chat_tab: ft.Control,
    model_dropdown: ft.Control,
    refresh_models_button: ft.Control,
    connection_dot: ft.Control,
    connection_label: ft.Control,
) -> dict:
    sidebar_container = ft.Container(
        width=int(sidebar_width),
        bgcolor=colors.get("SIDEBAR_BG"),
        padding=12,
        content=context_panel,
        border=ft.border.only(right=ft.BorderSide(1, colors.get("BORDER"))),
    )

    top_bar = ft.Container(
        padding=ft.padding.symmetric(horizontal=16, vertical=10),
        bgcolor=colors.get("SURFACE_ALT"),
        border=ft.border.only(bottom=ft.BorderSide(1, colors.get("BORDER"))),
        content=ft.Row(
            [
                ft.Text(app_title, size=14, weight=ft.FontWeight.W_700, color=colors.get("TEXT_PRIMARY")),
                ft.Row([model_dropdown, refresh_models_button], spacing=6, vertical_alignment=ft.CrossAxisAlignment.CENTER),
                ft.Row([connection_dot, connection_label], spacing=6, vertical_alignment=ft.CrossAxisAlignment.CENTER),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        ),
    )

    main_container = ft.Container(
        expand=True,
        bgcolor=colors.get("BG"),
        content=ft.Column([top_bar, chat_tab], expand=True, spacing=0),
    )
    root = ft.Row([sidebar_container, main_container], expand=True, spacing=0)

    return {
        "sidebar_container": sidebar_container,
        "top_bar": top_bar,
        "main_container": main_container,
        "root_control": root,
    }
