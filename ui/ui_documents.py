from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from docx import Document
from pypdf import PdfReader

import ui_config as cfg
from ui_context import ContextItem
from ui_errors import DocumentError, DocumentReadError, UnsupportedDocument
from ui_filepicker import expand_folder


def _extract_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


def _extract_pdf(path: Path) -> str:
    reader = PdfReader(str(path))
    pages = [f"\n--- Page {idx} ---\n{page.extract_text() or ''}" for idx, page in enumerate(reader.pages, start=1)]
    return "\n".join(pages).strip()


def _extract_docx(path: Path) -> str:
    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs).strip()


# suffix group -> (label used in failure reasons, extractor)
_EXTRACTORS = (
    (cfg.TEXT_EXTENSIONS, "Unable to read file", _extract_text),
    (cfg.DOCX_EXTENSIONS, "DOCX Error", _extract_docx),
    (cfg.PDF_EXTENSIONS, "PDF Error", _extract_pdf),
)


def is_supported(path: str | Path) -> bool:
    return Path(path).suffix.lower() in cfg.SUPPORTED_EXTENSIONS


def read_document(path: str | Path) -> str:
    p = Path(path)
    suffix = p.suffix.lower()
    for extensions, label, extract in _EXTRACTORS:
        if suffix not in extensions:
            continue
        try:
            return extract(p)
        except Exception as exc:
            raise DocumentReadError(str(p), f"{label}: {exc}") from exc
    raise UnsupportedDocument(str(p), f"Unsupported file type: {suffix or '(none)'}")


@dataclass
class LoadReport:
    items: list[ContextItem] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)
    empty: list[str] = field(default_factory=list)


def load_document(path: str | Path) -> ContextItem:
    p = Path(path)
    content = read_document(p)
    try:
        size = p.stat().st_size
    except OSError as exc:
        raise DocumentReadError(str(p), f"Unable to stat file: {exc}") from exc
    return ContextItem(path=str(p), name=p.name, content=content, size=size)


def load_context_items(paths) -> LoadReport:
    """
    Extract every path (files, or folders expanded one level) into context items.

    One bad file never stops the batch: failures are collected in the report
    and logged, and files that extract to nothing are skipped.
    """
    report = LoadReport()
    for raw in paths or []:
        if not raw:
            continue
        p = Path(raw)
        if p.is_dir():
            targets = expand_folder(p)
            cfg.debug_log("documents", f"{p}: {len(targets)} supported file(s) in folder")
        else:
            targets = [str(p)]

        for target in targets:
            try:
                item = load_document(target)
            except DocumentError as exc:
                print(f"[documents] skipped {target}: {exc.reason}")
                report.failures.append((target, exc.reason))
                continue
            if not item.content:
                print(f"[documents] skipped {target}: no text extracted")
                report.empty.append(target)
                continue
            report.items.append(item)
    return report
