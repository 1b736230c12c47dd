"""升级检测器。 / Escalation detector.

无状态的单条发言检查：小写后的发言包含任一风险短语即标记。
提示的显示窗口与去抖由 MediationSession 负责，与检测结果本身无关。
"""

import logging
from dataclasses import dataclass
from typing import Optional

from voicevault.lexicon.tables import DEFAULT_LEXICON, Lexicon
from voicevault.utils.text import first_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EscalationResult:
    flagged: bool
    trigger: Optional[str] = None  # 词表顺序中第一个命中的短语
    reason: Optional[str] = None


def detect(
    utterance: Optional[str], lexicon: Lexicon = DEFAULT_LEXICON,
) -> EscalationResult:
    if not utterance:
        return EscalationResult(flagged=False)
    trigger = first_match(utterance, lexicon.escalation)
    if trigger is None:
        return EscalationResult(flagged=False)
    return EscalationResult(
        flagged=True,
        trigger=trigger,
        reason=f"Escalation language detected: '{trigger}'",
    )


class EscalationDetector:
    """基于词表的升级检测器，可被任何实现 detect(utterance) 的对象替换。"""

    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon

    def detect(self, utterance: Optional[str]) -> EscalationResult:
        result = detect(utterance, self.lexicon)
        if result.flagged:
            logger.debug("发言命中风险短语: %s", result.trigger)
        return result
