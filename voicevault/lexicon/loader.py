# loader.py
# =============================================================================
# 词表加载：从 YAML 文件覆盖内置分类词表。
#
# 文件中出现的表整体替换内置表，未出现的表保留默认值。
# 格式：
#   pain_indicators: [hurt, frustrated, ...]
#   values:
#     respect: [respect, dignity, honor]
#   need_patterns: ["I need", "I want"]
#   emotions:
#     anger: [angry, furious]
#     neutral: []
#   escalation: [never, always, "shut up"]
# =============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from voicevault.lexicon.tables import (
    DEFAULT_LEXICON,
    NEUTRAL_EMOTION,
    Lexicon,
)
from voicevault.lexicon.validator import (
    LEXICON_NOT_FOUND,
    LEXICON_SCHEMA_INVALID,
    LexiconValidationError,
)

logger = logging.getLogger(__name__)

_LIST_TABLES = ("pain_indicators", "need_patterns", "escalation")
_MAPPING_TABLES = ("values", "emotions")


class LexiconLoader:
    """词表加载器。

    生命周期：read -> validate -> merge -> freeze
    """

    def __init__(self, base: Lexicon = DEFAULT_LEXICON) -> None:
        self._base = base

    def load(self, path: Optional[str] = None) -> Lexicon:
        """加载词表。未指定 path 时直接返回内置词表。

        Raises:
            LexiconValidationError: 文件不存在或结构非法。
        """
        if path is None:
            return self._base

        lexicon_file = Path(path)
        if not lexicon_file.is_file():
            raise LexiconValidationError(
                LEXICON_NOT_FOUND,
                f"词表文件不存在: {lexicon_file}",
            )

        try:
            raw = yaml.safe_load(lexicon_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise LexiconValidationError(
                LEXICON_SCHEMA_INVALID,
                f"词表 YAML 解析失败: {exc}",
            ) from exc

        lexicon = self.from_dict(raw if raw is not None else {})
        logger.info("词表已加载: %s", lexicon_file)
        return lexicon

    def from_dict(self, data: Any) -> Lexicon:
        """用字典中的表覆盖基础词表。"""
        if not isinstance(data, dict):
            raise LexiconValidationError(
                LEXICON_SCHEMA_INVALID,
                f"词表必须为字典，实际类型: {type(data).__name__}",
            )

        unknown = set(data) - set(_LIST_TABLES) - set(_MAPPING_TABLES)
        if unknown:
            logger.warning("忽略未知词表: %s", sorted(unknown))

        tables: Dict[str, Any] = {
            "pain_indicators": self._base.pain_indicators,
            "values": dict(self._base.values),
            "need_patterns": self._base.need_patterns,
            "emotions": dict(self._base.emotions),
            "escalation": self._base.escalation,
        }
        for name in _LIST_TABLES:
            if name in data:
                tables[name] = self._validate_words(name, data[name])
        for name in _MAPPING_TABLES:
            if name in data:
                tables[name] = self._validate_mapping(name, data[name])

        if NEUTRAL_EMOTION not in tables["emotions"]:
            raise LexiconValidationError(
                LEXICON_SCHEMA_INVALID,
                f"emotions 表必须包含 '{NEUTRAL_EMOTION}' 类别",
            )

        return Lexicon.build(**tables)

    # -------------------------------------------------------------------------
    # 内部方法
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_words(table: str, words: Any) -> Tuple[str, ...]:
        if words is None:
            return ()
        if not isinstance(words, list):
            raise LexiconValidationError(
                LEXICON_SCHEMA_INVALID,
                f"{table} 必须为字符串列表，实际类型: {type(words).__name__}",
            )
        cleaned: List[str] = []
        for word in words:
            if not isinstance(word, str) or not word.strip():
                raise LexiconValidationError(
                    LEXICON_SCHEMA_INVALID,
                    f"{table} 含有非法词条: {word!r}",
                )
            cleaned.append(word.strip())
        return tuple(cleaned)

    @classmethod
    def _validate_mapping(cls, table: str, mapping: Any) -> Dict[str, Tuple[str, ...]]:
        if not isinstance(mapping, dict) or not mapping:
            raise LexiconValidationError(
                LEXICON_SCHEMA_INVALID,
                f"{table} 必须为非空的 类别 -> 词列表 映射",
            )
        result: Dict[str, Tuple[str, ...]] = {}
        for category, words in mapping.items():
            if not isinstance(category, str) or not category.strip():
                raise LexiconValidationError(
                    LEXICON_SCHEMA_INVALID,
                    f"{table} 含有非法类别名: {category!r}",
                )
            result[category.strip()] = cls._validate_words(
                f"{table}.{category}", words
            )
        return result
