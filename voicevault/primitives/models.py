# models.py
# =============================================================================
# 本模块定义调解会话引擎的全部核心数据模型。
# / Core data models of the mediation session engine.
#
# 包含：Participant、Narrative、ParticipantSignals、ConflictSnapshot、
#       ResolutionProposal、RoundState、EscalationState、PeacePact、SessionState 等。
# 所有状态仅存在于单次会话的生命周期内，不做任何持久化。
# / All state lives only for the lifetime of one session; nothing is persisted.
# =============================================================================

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


# =============================================================================
# 参与者与叙述 / Participants & narratives
# =============================================================================


@dataclass(frozen=True)
class Participant:
    """会话参与者：注册后不可变。 / Session participant, immutable once registered.

    id 从 1 开始编号，在会话内稳定；display_name 在注册时按
    alias > preferred_name > "Participant {id}" 一次性解析，之后不再重新推导。
    """

    id: int
    display_name: str
    alias: str = ""
    preferred_name: str = ""


@dataclass
class Narrative:
    """参与者的个人陈述（每人一份，快照确认前可覆盖）。"""

    participant_id: int
    text: str
    captured_at: str  # ISO-8601 时间戳


@dataclass(frozen=True)
class ConsentFlags:
    """四项必需的知情同意。 / The four required consent flags."""

    emotional_safety: bool = False
    voice_transcription: bool = False
    ai_arbitration: bool = False
    privacy_policy: bool = False

    @property
    def all_given(self) -> bool:
        return (
            self.emotional_safety
            and self.voice_transcription
            and self.ai_arbitration
            and self.privacy_policy
        )


# =============================================================================
# 叙述分析结果 / Narrative analysis results
# =============================================================================


@dataclass(frozen=True)
class EmotionReading:
    """情绪分类结果。 / Emotion classification result.

    scores 保持情绪类别的声明顺序；intensity = 最大计数 / intensity_scale。
    """

    dominant: str
    scores: Dict[str, int]
    intensity: float


@dataclass(frozen=True)
class SignalFragment:
    """analyze() 的文本信号片段（不含情绪）。"""

    pain_points: List[str]
    values: List[str]
    needs: List[str]


@dataclass
class ParticipantSignals:
    """单个参与者的结构化信号。 / Structured signals for one participant.

    由当前 Narrative 确定性推导；Narrative 变更时重新计算。
    """

    participant_id: int
    participant_name: str
    pain_points: List[str] = field(default_factory=list)  # ≤ max_pain_points，保持原文顺序
    # 类别集合（无重复），≤ max_values，按词表声明顺序
    values: List[str] = field(default_factory=list)
    needs: List[str] = field(default_factory=list)  # ≤ max_needs
    dominant_emotion: str = "neutral"
    emotion_intensity: float = 0.0
    emotion_scores: Dict[str, int] = field(default_factory=dict)


# =============================================================================
# 冲突快照 / Conflict snapshot
# =============================================================================


@dataclass(frozen=True)
class ParticipantNeeds:
    participant_id: int
    participant_name: str
    needs: Tuple[str, ...]


@dataclass(frozen=True)
class EmotionalPattern:
    dominant_emotions: Tuple[str, ...]  # 参与者顺序
    high_intensity_participants: Tuple[str, ...]
    overall_tone: str  # tense / hurt / neutral


@dataclass(frozen=True)
class ConflictSnapshot:
    """跨参与者的中立冲突快照。 / Neutral cross-participant conflict snapshot."""

    common_values: Tuple[str, ...]
    per_participant_needs: Tuple[ParticipantNeeds, ...]
    emotional_pattern: EmotionalPattern
    misunderstandings: Tuple[str, ...]
    opportunities: Tuple[str, ...]


# =============================================================================
# 调解轮次 / Mediation rounds
# =============================================================================


@dataclass(frozen=True)
class ResolutionProposal:
    """候选解决方案：只读模板。"""

    id: int
    title: str
    description: str
    action_items: Tuple[str, ...]


@dataclass
class RoundState:
    """调解轮次状态。

    responses 的键为 (phase, participant_id)。current_index 仅在
    acknowledgment / clarification 阶段有意义。
    """

    phase: str = "acknowledgment"  # acknowledgment / clarification / resolution
    current_index: int = 0
    responses: Dict[Tuple[str, int], str] = field(default_factory=dict)

    def has_response(self, phase: str, participant_id: int) -> bool:
        return (phase, participant_id) in self.responses

    def responses_for(self, phase: str) -> Dict[int, str]:
        return {
            pid: text
            for (p, pid), text in self.responses.items()
            if p == phase
        }


@dataclass(frozen=True)
class EscalationWarning:
    """风险用语提示：仅在显示窗口内可见。 / Risk-language warning, visible for a fixed window."""

    participant_id: int
    phase: str
    trigger: str
    raised_at: float  # 单调时钟（秒）
    expires_at: float

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


@dataclass
class EscalationState:
    detected: bool = False
    reason: Optional[str] = None
    warning: Optional[EscalationWarning] = None


# =============================================================================
# 协议草稿与反馈 / Agreement draft & feedback
# =============================================================================


@dataclass
class PeacePact:
    """最终书面协议（Peace Pact）。"""

    title: str
    date: str
    participants: str
    content: str


@dataclass(frozen=True)
class SessionFeedback:
    rating: int  # 1-5
    helpful: str = ""
    suggestions: str = ""
    would_recommend: Optional[bool] = None


# =============================================================================
# SessionState：会话根聚合 / Root aggregate
# =============================================================================


@dataclass
class SessionState:
    """会话根聚合，由 MediationSession 独占持有。

    其他组件只接收副本并返回派生值，从不直接修改本对象。
    / Owned exclusively by MediationSession; other components receive copies.
    """

    session_id: str
    phase: str = "CONSENT_PENDING"  # 取值见 engine.phases
    consent_given: bool = False
    consent: ConsentFlags = field(default_factory=ConsentFlags)
    participants: List[Participant] = field(default_factory=list)
    intake_index: int = 0
    narratives: Dict[int, Narrative] = field(default_factory=dict)
    signals: Dict[int, ParticipantSignals] = field(default_factory=dict)
    conflict_snapshot: Optional[ConflictSnapshot] = None
    snapshot_approved: bool = False
    round: RoundState = field(default_factory=RoundState)
    proposals: List[ResolutionProposal] = field(default_factory=list)
    selected_proposal: Optional[ResolutionProposal] = None
    resolution_draft: Optional[ResolutionProposal] = None
    peace_pact: Optional[PeacePact] = None
    escalation: EscalationState = field(default_factory=EscalationState)
    complete: bool = False
    feedback: Optional[SessionFeedback] = None

    @property
    def paused(self) -> bool:
        return self.phase == "PAUSED"

    def participant(self, participant_id: int) -> Optional[Participant]:
        for p in self.participants:
            if p.id == participant_id:
                return p
        return None

    def to_dict(self) -> Dict[str, Any]:
        """渲染为普通字典（供 UI 使用）。响应键展开为 "phase:participant_id"。"""
        data = asdict(self)
        data["round"]["responses"] = {
            f"{phase}:{pid}": text
            for (phase, pid), text in self.round.responses.items()
        }
        data["narratives"] = {str(k): v for k, v in data["narratives"].items()}
        data["signals"] = {str(k): v for k, v in data["signals"].items()}
        return data
