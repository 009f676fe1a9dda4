from __future__ import annotations

from typing import Iterable

from ui_context import ContextItem


CONTEXT_INTRO = "Based on the following context:"
CONTEXT_CLOSE = "---"


def estimate_tokens(text: str, chars_per_token: int = 4) -> int:
    if not text:
        return 0
    try:
        cpt = int(chars_per_token)
        if cpt <= 0:
            cpt = 4
        return max(0, int(len(text) / cpt))
    except (TypeError, ValueError):
        return 0


def format_context_block(item: ContextItem) -> str:
    return f"--- {item.name} ---\n{item.content}\n\n"


def assemble_prompt(items: Iterable[ContextItem], question: str) -> str:
    """
    Build the text sent to the model for one question.

    With no context the question goes out as-is. Otherwise:

        Based on the following context:

        --- a.txt ---
        <content of a.txt>

        --- b.docx ---
        <content of b.docx>

        ---

        Question: <question>

    Items keep store order and their content is never trimmed or truncated.
    """
    items = list(items or ())
    question = question if question is not None else ""
    if not items:
        return question

    parts = [f"{CONTEXT_INTRO}\n\n"]
    for item in items:
        parts.append(format_context_block(item))
    parts.append(f"{CONTEXT_CLOSE}\n\nQuestion: {question}")
    return "".join(parts)
