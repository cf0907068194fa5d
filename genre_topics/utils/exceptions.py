from typing import Optional


class PipelineError(Exception):
    """Unrecoverable failure of one pipeline stage."""

    def __init__(self, stage: str, code: str, message: Optional[str] = None):
        self.stage = stage
        self.code = code
        self.message = message or "An error occurred"
        super().__init__(f"[{stage}] {code}: {self.message}")

    def to_dict(self) -> dict:
        return {"stage": self.stage, "code": self.code, "message": self.message}


class EmptyCorpusError(PipelineError):
    """No documents to work with."""

    def __init__(self, stage: str, message: Optional[str] = None):
        super().__init__(stage=stage, code="EMPTY_CORPUS", message=message)


class EmptyVocabularyError(PipelineError):
    """Every token was filtered out."""

    def __init__(self, stage: str, message: Optional[str] = None):
        super().__init__(stage=stage, code="EMPTY_VOCABULARY", message=message)


class EmptyMatrixError(PipelineError):
    """No row of the term matrix survived filtering."""

    def __init__(self, stage: str, message: Optional[str] = None):
        super().__init__(stage=stage, code="EMPTY_MATRIX", message=message)


class InvalidConfigError(PipelineError):
    """Configuration value out of range."""

    def __init__(self, stage: str, message: Optional[str] = None):
        super().__init__(stage=stage, code="INVALID_CONFIG", message=message)


class MissingColumnError(PipelineError):
    """Input table lacks a required column."""

    def __init__(self, stage: str, message: Optional[str] = None):
        super().__init__(stage=stage, code="MISSING_COLUMN", message=message)
