# validator.py
# =============================================================================
# 词表校验错误定义。 / Lexicon validation errors.
# =============================================================================

from __future__ import annotations


# -----------------------------------------------------------------------------
# 错误码
# -----------------------------------------------------------------------------
LEXICON_NOT_FOUND = "LEXICON_NOT_FOUND"
LEXICON_SCHEMA_INVALID = "LEXICON_SCHEMA_INVALID"


class LexiconValidationError(Exception):
    """词表校验错误：携带错误码与诊断信息。"""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")
