"""叙述分析器。 / Narrative analyzer.

把单个参与者的自由文本陈述转换为结构化信号（痛点、价值、需求、主导情绪）。
/ Converts one participant's free-text narrative into structured signals.

全部为纯函数：相同 (text, lexicon) 输入总是得到相同输出，无副作用。
空文本得到空信号列表、neutral 主导情绪与零强度，这是定义结果而非错误。
"""

import logging
from typing import Dict, List, Optional

from voicevault.config import SessionConfig
from voicevault.lexicon.tables import DEFAULT_LEXICON, Lexicon, NEUTRAL_EMOTION
from voicevault.primitives.models import (
    EmotionReading,
    Participant,
    ParticipantSignals,
    SignalFragment,
)
from voicevault.utils.text import contains_any, count_present, split_sentences

logger = logging.getLogger(__name__)


def extract_pain_points(
    text: Optional[str], lexicon: Lexicon = DEFAULT_LEXICON, limit: int = 3,
) -> List[str]:
    """含任一痛点词的句子，保持原文顺序，取前 limit 句。"""
    qualifying = [
        sentence
        for sentence in split_sentences(text)
        if contains_any(sentence, lexicon.pain_indicators)
    ]
    return qualifying[:limit]


def extract_values(
    text: Optional[str], lexicon: Lexicon = DEFAULT_LEXICON, limit: int = 3,
) -> List[str]:
    """任一关键词变体出现在全文中即视为命中该价值类别，按词表声明顺序输出。"""
    if not text:
        return []
    found = [
        category
        for category, keywords in lexicon.values
        if contains_any(text, keywords)
    ]
    return found[:limit]


def extract_needs(
    text: Optional[str],
    lexicon: Lexicon = DEFAULT_LEXICON,
    limit: int = 3,
    dedupe: bool = False,
) -> List[str]:
    """按意图短语逐一扫描句子，命中的句子原样（去首尾空白）收集。

    同一句子命中多个意图短语时会在不同短语的扫描中重复出现，
    除非 dedupe=True。收集满 limit 条即停止。
    """
    sentences = split_sentences(text)
    needs: List[str] = []
    if limit <= 0:
        return needs
    for pattern in lexicon.need_patterns:
        for sentence in sentences:
            if not contains_any(sentence, (pattern,)):
                continue
            if dedupe and sentence in needs:
                continue
            needs.append(sentence)
            if len(needs) >= limit:
                return needs
    return needs


def classify_emotion(
    text: Optional[str],
    lexicon: Lexicon = DEFAULT_LEXICON,
    scale: float = 10.0,
    clamp: bool = False,
) -> EmotionReading:
    """情绪分类。

    每个类别的得分 = 该类别关键词在小写文本中出现的个数（每个词最多计一次）。
    主导情绪按声明顺序折叠：只有当当前领先者严格更高时才保留，
    因此平局时后声明的类别胜出，全零时落到末尾的 neutral。
    intensity = 最大得分 / scale；clamp=True 时截断到 1.0。
    """
    lowered = (text or "").lower()
    scores: Dict[str, int] = {
        category: count_present(lowered, keywords)
        for category, keywords in lexicon.emotions
    }

    categories = list(scores)
    dominant = categories[0] if categories else NEUTRAL_EMOTION
    for category in categories[1:]:
        if not scores[dominant] > scores[category]:
            dominant = category

    top = max(scores.values()) if scores else 0
    intensity = top / scale
    if clamp:
        intensity = min(1.0, intensity)
    return EmotionReading(dominant=dominant, scores=scores, intensity=intensity)


def analyze(
    text: Optional[str],
    lexicon: Lexicon = DEFAULT_LEXICON,
    config: Optional[SessionConfig] = None,
) -> SignalFragment:
    """提取痛点、价值与需求。"""
    config = config or SessionConfig()
    return SignalFragment(
        pain_points=extract_pain_points(text, lexicon, config.max_pain_points),
        values=extract_values(text, lexicon, config.max_values),
        needs=extract_needs(
            text, lexicon, config.max_needs, dedupe=config.dedupe_needs,
        ),
    )


class NarrativeAnalyzer:
    """基于词表的叙述分析器。

    MediationSession 只依赖 analyze / classify_emotion / signals_for 三个方法，
    任何实现了同名方法的对象（例如学习型模型）都可以替换本类。
    """

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        config: Optional[SessionConfig] = None,
    ):
        self.lexicon = lexicon
        self.config = config or SessionConfig()

    def analyze(self, text: Optional[str]) -> SignalFragment:
        return analyze(text, self.lexicon, self.config)

    def classify_emotion(self, text: Optional[str]) -> EmotionReading:
        return classify_emotion(
            text,
            self.lexicon,
            scale=self.config.intensity_scale,
            clamp=self.config.clamp_intensity,
        )

    def signals_for(
        self, participant: Participant, text: Optional[str],
    ) -> ParticipantSignals:
        """为单个参与者生成完整信号。"""
        fragment = self.analyze(text)
        emotion = self.classify_emotion(text)
        logger.debug(
            "叙述分析完成: participant=%s pains=%d values=%s needs=%d emotion=%s(%.2f)",
            participant.id, len(fragment.pain_points), fragment.values,
            len(fragment.needs), emotion.dominant, emotion.intensity,
        )
        return ParticipantSignals(
            participant_id=participant.id,
            participant_name=participant.display_name,
            pain_points=list(fragment.pain_points),
            values=list(fragment.values),
            needs=list(fragment.needs),
            dominant_emotion=emotion.dominant,
            emotion_intensity=emotion.intensity,
            emotion_scores=dict(emotion.scores),
        )
