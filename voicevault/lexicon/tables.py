# tables.py
# =============================================================================
# 词表：语义类别到触发词/短语的静态映射。
# / Lexicon tables - static mappings from semantic categories to trigger words.
#
# 所有分类均为确定性的关键词/子串匹配，不是学习型推断。
# 类别的声明顺序有语义：价值类别按声明顺序输出；情绪类别按声明顺序
# 折叠，neutral 必须位于最后（无关键词，作为全零时的默认类别）。
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

NEUTRAL_EMOTION = "neutral"

PAIN_INDICATORS: Tuple[str, ...] = (
    "hurt",
    "frustrated",
    "angry",
    "disappointed",
    "upset",
    "bothered",
    "annoyed",
)

VALUE_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "respect": ("respect", "dignity", "honor"),
    "trust": ("trust", "honesty", "reliability"),
    "communication": ("communication", "listening", "understanding"),
    "fairness": ("fair", "equal", "just"),
    "support": ("support", "help", "care"),
    "autonomy": ("independence", "freedom", "choice"),
}

# 第一人称意图短语（大小写不敏感匹配）
NEED_PATTERNS: Tuple[str, ...] = (
    "I need",
    "I want",
    "I require",
    "I wish",
    "I hope",
)

EMOTION_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "anger": (
        "angry", "furious", "mad", "hate",
        "frustrated", "annoyed", "pissed", "outraged",
    ),
    "sadness": (
        "sad", "hurt", "disappointed", "broken",
        "devastated", "upset", "depressed", "heartbroken",
    ),
    "fear": (
        "scared", "worried", "anxious", "nervous",
        "afraid", "concerned", "terrified", "panicked",
    ),
    "joy": (
        "happy", "glad", "pleased", "grateful",
        "thankful", "hopeful", "excited", "delighted",
    ),
    NEUTRAL_EMOTION: (),
}

ESCALATION_PHRASES: Tuple[str, ...] = (
    "never",
    "always",
    "hate",
    "stupid",
    "idiot",
    "shut up",
)


@dataclass(frozen=True)
class Lexicon:
    """一组完整的分类词表（不可变）。 / A complete, immutable set of classifier tables.

    映射类表以 (类别, 关键词元组) 的有序元组保存，保证声明顺序且可哈希。
    """

    pain_indicators: Tuple[str, ...]
    values: Tuple[Tuple[str, Tuple[str, ...]], ...]
    need_patterns: Tuple[str, ...]
    emotions: Tuple[Tuple[str, Tuple[str, ...]], ...]
    escalation: Tuple[str, ...]

    @classmethod
    def build(
        cls,
        pain_indicators: Sequence[str] = PAIN_INDICATORS,
        values: Mapping[str, Sequence[str]] = VALUE_CATEGORIES,
        need_patterns: Sequence[str] = NEED_PATTERNS,
        emotions: Mapping[str, Sequence[str]] = EMOTION_CATEGORIES,
        escalation: Sequence[str] = ESCALATION_PHRASES,
    ) -> Lexicon:
        """从普通序列/映射构建 Lexicon，neutral 始终排在情绪表末尾。"""
        ordered_emotions = [
            (name, tuple(words))
            for name, words in emotions.items()
            if name != NEUTRAL_EMOTION
        ]
        ordered_emotions.append(
            (NEUTRAL_EMOTION, tuple(emotions.get(NEUTRAL_EMOTION, ())))
        )
        return cls(
            pain_indicators=tuple(pain_indicators),
            values=tuple((name, tuple(words)) for name, words in values.items()),
            need_patterns=tuple(need_patterns),
            emotions=tuple(ordered_emotions),
            escalation=tuple(escalation),
        )

    @property
    def value_categories(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.values)

    @property
    def emotion_categories(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.emotions)


DEFAULT_LEXICON = Lexicon.build()
