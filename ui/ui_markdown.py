import flet as ft

from chat_controller import Message, MessageKind


def split_markdown_fences(md_text: str) -> list[tuple[str, str, str]]:
    """
    Split an assistant reply into markdown text and fenced code blocks.
    Returns a list of (kind, lang, text) where kind is "md" or "code".
    An unterminated fence is kept as markdown so nothing is dropped.
    """
    lines = (md_text or "").splitlines()
    segments: list[tuple[str, str, str]] = []

    md_buf: list[str] = []
    code_buf: list[str] = []
    in_code = False
    code_lang = ""

    def flush_md():
        nonlocal md_buf
        text = "\n".join(md_buf)
        if text.strip():
            segments.append(("md", "", text))
        md_buf = []

    def flush_code():
        nonlocal code_buf, code_lang
        segments.append(("code", code_lang, "\n".join(code_buf)))
        code_buf = []
        code_lang = ""

    for ln in lines:
        s = ln.strip()
        if s.startswith("```"):
            if not in_code:
                flush_md()
                in_code = True
                code_lang = s[3:].strip()
            else:
                in_code = False
                flush_code()
            continue
        if in_code:
            code_buf.append(ln)
        else:
            md_buf.append(ln)

    if in_code:
        md_buf.append("```" + code_lang)
        md_buf.extend(code_buf)
    flush_md()
    return segments


def make_code_block(*, page: ft.Page, show_snack, lang: str, code: str, colors: dict) -> ft.Control:
    title = (lang or "").strip() or "code"
    raw = code or ""

    def copy(_=None):
        try:
            page.set_clipboard(raw)
            show_snack("Code copied.", colors.get("SUCCESS"))
        except Exception as exc:
            show_snack(f"Copy failed: {exc}", colors.get("DANGER"))

    header = ft.Row(
        [
            ft.Text(title, size=11, color=colors.get("TEXT_MUTED"), weight=ft.FontWeight.W_600),
            ft.Container(expand=True),
            ft.IconButton(icon=ft.icons.CONTENT_COPY, tooltip="Copy", icon_color=colors.get("TEXT_MUTED"), on_click=copy),
        ],
        spacing=6,
        vertical_alignment=ft.CrossAxisAlignment.CENTER,
    )
    body = ft.Text(raw, selectable=True, font_family="monospace", size=12, color=colors.get("TEXT_PRIMARY"))

    return ft.Container(
        padding=12,
        bgcolor=colors.get("SURFACE_ALT"),
        border=ft.border.all(1, colors.get("BORDER")),
        border_radius=12,
        content=ft.Column([header, body], spacing=8, tight=True),
    )


def _markdown(text: str, on_tap_link) -> ft.Control:
    return ft.Markdown(
        text,
        selectable=True,
        extension_set=ft.MarkdownExtensionSet.GITHUB_WEB,
        on_tap_link=on_tap_link,
    )


def render_markdown(*, page: ft.Page, md_text: str, open_link_handler, show_snack, colors: dict) -> ft.Control:
    segs = split_markdown_fences(md_text or "")
    if not segs:
        return _markdown(md_text or "", open_link_handler)
    if len(segs) == 1 and segs[0][0] == "md":
        return _markdown(segs[0][2], open_link_handler)

    controls: list[ft.Control] = []
    for kind, lang, text in segs:
        if kind == "md":
            controls.append(_markdown(text, open_link_handler))
        else:
            controls.append(make_code_block(page=page, show_snack=show_snack, lang=lang, code=text, colors=colors))
    return ft.Column(controls, spacing=10, tight=True)


def render_message_body(*, page: ft.Page, message: Message, open_link_handler, show_snack, colors: dict) -> ft.Control:
    if message.kind is MessageKind.ASSISTANT and not message.pending:
        return render_markdown(
            page=page,
            md_text=message.content,
            open_link_handler=open_link_handler,
            show_snack=show_snack,
            colors=colors,
        )
    if message.pending:
        return ft.Row(
            [
                ft.ProgressRing(width=14, height=14, stroke_width=2, color=colors.get("ACCENT")),
                ft.Text(message.content, color=colors.get("TEXT_MUTED")),
            ],
            spacing=8,
        )
    return ft.Text(message.content, selectable=True, color=colors.get("TEXT_PRIMARY"))
