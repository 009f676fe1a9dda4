class DocumentError(RuntimeError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedDocument(DocumentError):
    pass


class DocumentReadError(DocumentError):
    pass


class ChatRejected(RuntimeError):
    """Submission refused: empty question or a request already in flight."""


class ModelFailure(RuntimeError):
    """Any model server problem: connectivity, HTTP status or payload shape."""


class ContextIndexError(IndexError):
    def __init__(self, index: int, count: int):
        super().__init__(f"Context index {index} out of range (0..{count - 1})" if count else f"Context index {index} out of range (store is empty)")
        self.index = index
        self.count = count
