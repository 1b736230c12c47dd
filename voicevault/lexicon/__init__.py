# lexicon/
# 分类词表定义、加载与校验。

from voicevault.lexicon.loader import LexiconLoader
from voicevault.lexicon.tables import DEFAULT_LEXICON, Lexicon
from voicevault.lexicon.validator import (
    LEXICON_NOT_FOUND,
    LEXICON_SCHEMA_INVALID,
    LexiconValidationError,
)

__all__ = [
    "DEFAULT_LEXICON",
    "Lexicon",
    "LexiconLoader",
    "LexiconValidationError",
    "LEXICON_NOT_FOUND",
    "LEXICON_SCHEMA_INVALID",
]
