class QuestionLookupError(LookupError):
    """Raised when a question id cannot be resolved against the question store."""

    def __init__(self, question_id: str, message: str | None = None, details: object | None = None) -> None:
        super().__init__(message or f"Failed to fetch question: {question_id}")
        self.question_id = question_id
        self.details = details


class QuestionNotFoundError(QuestionLookupError):
    """Raised when the question store has no record for the id."""

    def __init__(self, question_id: str) -> None:
        super().__init__(question_id, message=f"Question not found: {question_id}")


class RecordStoreError(RuntimeError):
    """Raised when the record store backend fails (network errors, rejected writes, bad payloads)."""

    def __init__(self, message: str, details: object | None = None) -> None:
        super().__init__(message)
        self.details = details
