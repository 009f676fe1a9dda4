import os
import sys


APP_TITLE = "Context Chat"


OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://127.0.0.1:11434").rstrip("/")
if "://" not in OLLAMA_HOST:
    OLLAMA_HOST = f"http://{OLLAMA_HOST}"
DEFAULT_MODEL = os.getenv("OLLAMA_DEFAULT_MODEL", "llama3.1").strip() or "llama3.1"


CONNECT_TIMEOUT_S = float(os.getenv("OLLAMA_CONNECT_TIMEOUT_S", "10"))
_read_timeout_raw = os.getenv("OLLAMA_READ_TIMEOUT_S", "300").strip().lower()
READ_TIMEOUT_S = None if _read_timeout_raw in ("", "none", "null") else float(_read_timeout_raw)
HEALTH_TIMEOUT_S = float(os.getenv("OLLAMA_HEALTH_TIMEOUT_S", "3"))


TEXT_EXTENSIONS = (".txt", ".md")
DOCX_EXTENSIONS = (".docx",)
PDF_EXTENSIONS = (".pdf",)
SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS + DOCX_EXTENSIONS + PDF_EXTENSIONS


SIDEBAR_WIDTH = 320
CHAT_MAX_WIDTH = 760
PREVIEW_CHARS = 200
CHARS_PER_TOKEN = 4


DEBUG = os.getenv("CONTEXT_CHAT_DEBUG", "0").strip().lower() in ("1", "true", "yes", "on") or "--dev" in sys.argv


def debug_log(tag: str, message: str) -> None:
    if DEBUG:
        print(f"[{tag}] {message}")
