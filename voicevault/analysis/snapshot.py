"""冲突快照合成器。 / Conflict snapshot synthesizer.

把所有参与者的信号聚合为一份中立的跨参与者快照。对同一组信号重复调用
得到值相等、顺序稳定的结果。
"""

import logging
from typing import Dict, List, Sequence

from voicevault.primitives.models import (
    ConflictSnapshot,
    EmotionalPattern,
    ParticipantNeeds,
    ParticipantSignals,
)

logger = logging.getLogger(__name__)

HIGH_INTENSITY_THRESHOLD = 0.5

# 整体基调：按固定优先级匹配，先命中者胜出
TONE_PRIORITY = (
    ("anger", "tense"),
    ("sadness", "hurt"),
)
DEFAULT_TONE = "neutral"

# 占位启发式：不从内容推导
MISUNDERSTANDINGS = (
    "Different perspectives on the same events",
    "Unmet expectations about communication",
    "Assumptions about intentions",
)

GENERIC_OPPORTUNITIES = (
    "Willingness to engage in mediation",
    "Desire for resolution",
)


def find_common_values(signals: Sequence[ParticipantSignals]) -> List[str]:
    """出现在多于一位参与者信号中的价值类别，按首次出现顺序。

    每位参与者对同一类别只计一次。
    """
    counts: Dict[str, int] = {}
    for s in signals:
        for value in dict.fromkeys(s.values):
            counts[value] = counts.get(value, 0) + 1
    return [value for value, count in counts.items() if count > 1]


def analyze_emotional_pattern(
    signals: Sequence[ParticipantSignals],
    threshold: float = HIGH_INTENSITY_THRESHOLD,
) -> EmotionalPattern:
    emotions = tuple(s.dominant_emotion for s in signals)
    high_intensity = tuple(
        s.participant_name for s in signals if s.emotion_intensity > threshold
    )
    tone = DEFAULT_TONE
    for emotion, candidate in TONE_PRIORITY:
        if emotion in emotions:
            tone = candidate
            break
    return EmotionalPattern(
        dominant_emotions=emotions,
        high_intensity_participants=high_intensity,
        overall_tone=tone,
    )


def identify_opportunities(common_values: Sequence[str]) -> List[str]:
    opportunities: List[str] = []
    if common_values:
        opportunities.append(f"Shared values: {', '.join(common_values)}")
    opportunities.extend(GENERIC_OPPORTUNITIES)
    return opportunities


def synthesize(
    signals: Sequence[ParticipantSignals],
    high_intensity_threshold: float = HIGH_INTENSITY_THRESHOLD,
) -> ConflictSnapshot:
    """合成冲突快照。

    Args:
        signals: 参与者顺序排列的信号列表（跳过陈述的参与者不在其中）。
        high_intensity_threshold: emotion_intensity 严格大于该值视为高强度。

    Returns:
        ConflictSnapshot（不可变）。
    """
    common_values = find_common_values(signals)
    snapshot = ConflictSnapshot(
        common_values=tuple(common_values),
        per_participant_needs=tuple(
            ParticipantNeeds(
                participant_id=s.participant_id,
                participant_name=s.participant_name,
                needs=tuple(s.needs),
            )
            for s in signals
        ),
        emotional_pattern=analyze_emotional_pattern(
            signals, high_intensity_threshold,
        ),
        misunderstandings=MISUNDERSTANDINGS,
        opportunities=tuple(identify_opportunities(common_values)),
    )
    logger.debug(
        "冲突快照合成: participants=%d common_values=%s tone=%s",
        len(signals), list(common_values),
        snapshot.emotional_pattern.overall_tone,
    )
    return snapshot
