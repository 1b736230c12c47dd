# analysis/
# =============================================================================
# 叙述分析、冲突快照合成、升级检测与方案生成。
# / Narrative analysis, snapshot synthesis, escalation detection & proposals.
# =============================================================================

from voicevault.analysis.escalation import EscalationDetector, EscalationResult
from voicevault.analysis.narrative import NarrativeAnalyzer

__all__ = [
    "EscalationDetector",
    "EscalationResult",
    "NarrativeAnalyzer",
]
