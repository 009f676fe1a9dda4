from chat_controller import MessageKind


TEXT_PRIMARY = "#E6EDF3"
TEXT_MUTED = "#9AA6B2"


BG = "#0F1115"
SIDEBAR_BG = "#0B0D10"
SURFACE = "#151A22"
SURFACE_ALT = "#11151B"
BORDER = "#2A3342"

ACCENT = "#10A37F"
ACCENT_SOFT = "#0D2F28"
SUCCESS = "#22C55E"
WARNING = "#F59E0B"
DANGER = "#EF4444"

SYSTEM_BG = "#2A4D3A"
SYSTEM_FG = "#90EE90"
ERROR_BG = "#3A1F23"


COLORS = {
    "BG": BG,
    "SIDEBAR_BG": SIDEBAR_BG,
    "SURFACE": SURFACE,
    "SURFACE_ALT": SURFACE_ALT,
    "BORDER": BORDER,
    "TEXT_PRIMARY": TEXT_PRIMARY,
    "TEXT_MUTED": TEXT_MUTED,
    "ACCENT": ACCENT,
    "SUCCESS": SUCCESS,
    "DANGER": DANGER,
}


def bubble_colors(kind: MessageKind) -> tuple[str, str]:
    """(background, text) for a transcript bubble."""
    return {
        MessageKind.USER: (SURFACE, TEXT_PRIMARY),
        MessageKind.ASSISTANT: (SURFACE_ALT, TEXT_PRIMARY),
        MessageKind.SYSTEM: (SYSTEM_BG, SYSTEM_FG),
        MessageKind.ERROR: (ERROR_BG, TEXT_PRIMARY),
    }[kind]


def connection_color(status: str) -> str:
    return {
        "checking": WARNING,
        "connected": SUCCESS,
        "disconnected": DANGER,
    }.get(status, SURFACE_ALT)
