"""调解会话状态机。 / Mediation session state machine.

职责 / Responsibilities:
1. 生命周期编排：知情同意、身份注册、叙述采集、快照确认、三个调解轮次、协议草稿
   / Orchestrate consent, identity, intake, snapshot approval, rounds and drafting
2. 状态管理：独占持有 SessionState，所有修改都经过唯一的 _dispatch 入口
   / Own SessionState; every mutation passes through the single _dispatch point
3. 升级监测：对轮次发言做风险检测，管理提示的显示窗口与暂停状态
   / Escalation monitoring, warning visibility window and the pause state

不负责：关键词匹配、快照聚合、方案模板（分别委托给 analysis 子模块）。
/ Not responsible for: keyword matching, aggregation, proposal templates.

所有命令同步执行；前置条件不满足时返回 accepted=False 的 CommandResult，从不抛出。
"""

import copy
import logging
import time
import uuid
from dataclasses import fields, replace
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from voicevault.analysis import proposals as proposal_generator
from voicevault.analysis.escalation import EscalationDetector
from voicevault.analysis.narrative import NarrativeAnalyzer
from voicevault.analysis.snapshot import synthesize
from voicevault.capture.producer import NarrativeCapture
from voicevault.config import SessionConfig
from voicevault.engine import phases
from voicevault.engine.draft import draft_peace_pact
from voicevault.engine.errors import (
    CAPTURE_UNAVAILABLE,
    INVALID_INPUT,
    OUT_OF_TURN,
    TRANSITION_NOT_PERMITTED,
    UNKNOWN_PARTICIPANT,
    CommandRejected,
    CommandResult,
)
from voicevault.lexicon.tables import DEFAULT_LEXICON, Lexicon
from voicevault.primitives.events import SessionEvent
from voicevault.primitives.models import (
    ConsentFlags,
    EscalationWarning,
    Narrative,
    Participant,
    ParticipantSignals,
    RoundState,
    SessionFeedback,
    SessionState,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionEvent], None]

_SIGNAL_LIST_FIELDS = {
    "pain_points": "max_pain_points",
    "values": "max_values",
    "needs": "max_needs",
}
_SIGNAL_PATCH_FIELDS = set(_SIGNAL_LIST_FIELDS) | {
    "dominant_emotion",
    "emotion_intensity",
}


def _new_session_id() -> str:
    return str(uuid.uuid4())[:8]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MediationSession:
    """调解会话状态机。 / Mediation session state machine.

    一个实例对应一次会话；reset_session 是复用实例的唯一途径。
    analyzer / detector 只按方法名调用，可替换为任何同接口实现。
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        lexicon: Lexicon = DEFAULT_LEXICON,
        analyzer: Optional[NarrativeAnalyzer] = None,
        detector: Optional[EscalationDetector] = None,
        on_change: Optional[StateListener] = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = _utc_now,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = _new_session_id,
    ):
        self.config = config or SessionConfig()
        self.lexicon = lexicon
        self._analyzer = analyzer or NarrativeAnalyzer(lexicon, self.config)
        self._detector = detector or EscalationDetector(lexicon)
        self._listeners: List[StateListener] = []
        if on_change is not None:
            self._listeners.append(on_change)
        self._clock = clock
        self._now = now
        self._today = today
        self._id_factory = id_factory
        self._state = SessionState(session_id=id_factory())
        logger.info(f"[{self._state.session_id}] 会话已创建")

    # ------------------------------------------------------------------
    # 查询 / Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """会话状态的只读副本。"""
        return copy.deepcopy(self._state)

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def phase(self) -> str:
        return self._state.phase

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        self._listeners.remove(listener)

    def current_intake_participant(self) -> Optional[Participant]:
        s = self._state
        if s.phase != phases.INTAKE or s.intake_index >= len(s.participants):
            return None
        return s.participants[s.intake_index]

    def current_speaker(self) -> Optional[Participant]:
        """当前轮到发言的参与者（仅 acknowledgment / clarification）。"""
        s = self._state
        if s.phase not in (phases.ROUND, phases.PAUSED):
            return None
        if s.round.phase not in phases.DIALOGUE_PHASES:
            return None
        return s.participants[s.round.current_index]

    def current_instruction(self) -> Optional[phases.PhaseInstruction]:
        if self._state.phase not in (phases.ROUND, phases.PAUSED):
            return None
        return phases.PHASE_INSTRUCTIONS[self._state.round.phase]

    def escalation_warning_active(self) -> bool:
        """风险提示是否仍在显示窗口内。"""
        self._expire_warning()
        return self._state.escalation.warning is not None

    def phase_ready(self) -> bool:
        """当前轮次子阶段是否满足退出条件。"""
        s = self._state
        if s.phase != phases.ROUND:
            return False
        if s.round.phase == phases.RESOLUTION:
            return s.selected_proposal is not None
        return not self._missing_responders(s.round.phase)

    # ------------------------------------------------------------------
    # 命令 / Commands
    # ------------------------------------------------------------------

    def give_consent(
        self, flags: Union[ConsentFlags, Mapping[str, bool]],
    ) -> CommandResult:
        return self._dispatch("give_consent", self._give_consent, flags)

    def register_participants(
        self, entries: Sequence[Mapping[str, Optional[str]]],
    ) -> CommandResult:
        return self._dispatch(
            "register_participants", self._register_participants, entries,
        )

    def submit_narrative(self, participant_id: int, text: str) -> CommandResult:
        return self._dispatch(
            "submit_narrative", self._submit_narrative, participant_id, text,
        )

    def submit_capture(
        self,
        participant_id: int,
        capture: NarrativeCapture,
        fallback_text: str = "",
    ) -> CommandResult:
        return self._dispatch(
            "submit_capture", self._submit_capture,
            participant_id, capture, fallback_text,
        )

    def skip_narrative(self, participant_id: int) -> CommandResult:
        return self._dispatch(
            "skip_narrative", self._skip_narrative, participant_id,
        )

    def edit_participant_signals(
        self, participant_id: int, patch: Mapping[str, Any],
    ) -> CommandResult:
        return self._dispatch(
            "edit_participant_signals", self._edit_participant_signals,
            participant_id, patch,
        )

    def approve_snapshot(self) -> CommandResult:
        return self._dispatch("approve_snapshot", self._approve_snapshot)

    def submit_round_response(
        self, phase: str, participant_id: int, text: str,
    ) -> CommandResult:
        return self._dispatch(
            "submit_round_response", self._submit_round_response,
            phase, participant_id, text,
        )

    def complete_phase(self) -> CommandResult:
        return self._dispatch("complete_phase", self._complete_phase)

    def select_proposal(self, proposal_id: int) -> CommandResult:
        return self._dispatch(
            "select_proposal", self._select_proposal, proposal_id,
        )

    def pause_session(self, reason: Optional[str] = None) -> CommandResult:
        return self._dispatch("pause_session", self._pause_session, reason)

    def resume_session(self) -> CommandResult:
        return self._dispatch("resume_session", self._resume_session)

    def end_session(self) -> CommandResult:
        return self._dispatch("end_session", self._end_session)

    def edit_draft(self, new_text: str) -> CommandResult:
        return self._dispatch("edit_draft", self._edit_draft, new_text)

    def approve_draft(self) -> CommandResult:
        return self._dispatch("approve_draft", self._approve_draft)

    def submit_feedback(
        self,
        rating: int,
        helpful: str = "",
        suggestions: str = "",
        would_recommend: Optional[bool] = None,
    ) -> CommandResult:
        return self._dispatch(
            "submit_feedback", self._submit_feedback,
            rating, helpful, suggestions, would_recommend,
        )

    def reset_session(self) -> CommandResult:
        return self._dispatch("reset_session", self._reset_session)

    # ------------------------------------------------------------------
    # 分发 / Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, command: str, handler, *args) -> CommandResult:
        """唯一的状态修改入口：执行处理函数、推送事件、返回结果。"""
        self._expire_warning()
        logger.debug(f"[{self._state.session_id}] 命令: {command}")
        try:
            detail = handler(*args) or {}
        except CommandRejected as exc:
            logger.warning(
                f"[{self._state.session_id}] 命令被拒绝: {command} "
                f"({exc.code}) {exc.message}"
            )
            view = self.state
            self._emit(SessionEvent(
                type="command_rejected",
                phase=view.phase,
                session_id=view.session_id,
                state=view,
                command=command,
                detail={"code": exc.code, "message": exc.message},
            ))
            return CommandResult(
                accepted=False,
                command=command,
                state=view,
                code=exc.code,
                message=exc.message,
            )

        event_type = detail.pop("event", "state_changed")
        view = self.state
        self._emit(SessionEvent(
            type=event_type,
            phase=view.phase,
            session_id=view.session_id,
            state=view,
            command=command,
            detail=detail or None,
        ))
        return CommandResult(accepted=True, command=command, state=view)

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # 前置条件 / Preconditions
    # ------------------------------------------------------------------

    def _require_phase(self, *allowed: str) -> None:
        if self._state.phase not in allowed:
            raise CommandRejected(
                TRANSITION_NOT_PERMITTED,
                f"当前阶段 {self._state.phase} 不允许此操作"
                f"（允许: {', '.join(allowed)}）",
            )

    def _require_participant(self, participant_id: int) -> Participant:
        participant = self._state.participant(participant_id)
        if participant is None:
            raise CommandRejected(
                UNKNOWN_PARTICIPANT, f"未知参与者: {participant_id!r}",
            )
        return participant

    @staticmethod
    def _require_text(text: Optional[str], what: str) -> str:
        cleaned = text.strip() if isinstance(text, str) else ""
        if not cleaned:
            raise CommandRejected(INVALID_INPUT, f"{what} 不能为空")
        return cleaned

    def _set_phase(self, new_phase: str) -> None:
        old = self._state.phase
        self._state.phase = new_phase
        logger.info(f"[{self._state.session_id}] 阶段转换: {old} -> {new_phase}")

    # ------------------------------------------------------------------
    # 知情同意与身份 / Consent & identity
    # ------------------------------------------------------------------

    def _give_consent(self, flags) -> None:
        self._require_phase(phases.CONSENT_PENDING)
        if not isinstance(flags, ConsentFlags):
            if not isinstance(flags, Mapping):
                raise CommandRejected(INVALID_INPUT, "同意项必须为映射或 ConsentFlags")
            known = {f.name for f in fields(ConsentFlags)}
            unknown = sorted(set(flags) - known)
            if unknown:
                raise CommandRejected(INVALID_INPUT, f"未知同意项: {unknown}")
            flags = ConsentFlags(**{k: bool(v) for k, v in flags.items()})
        if not flags.all_given:
            raise CommandRejected(INVALID_INPUT, "必须同意全部四项条款")
        self._state.consent = flags
        self._state.consent_given = True
        self._set_phase(phases.IDENTITY_SETUP)

    def _register_participants(self, entries) -> Dict[str, Any]:
        self._require_phase(phases.IDENTITY_SETUP)
        cfg = self.config
        count = len(entries) if entries is not None else 0
        if not cfg.min_participants <= count <= cfg.max_participants:
            raise CommandRejected(
                INVALID_INPUT,
                f"参与者数量必须在 {cfg.min_participants}-{cfg.max_participants} "
                f"之间，实际: {count}",
            )

        participants: List[Participant] = []
        for pid, entry in enumerate(entries, start=1):
            if not isinstance(entry, Mapping):
                raise CommandRejected(
                    INVALID_INPUT, f"参与者 {pid} 的登记信息必须为映射: {entry!r}",
                )
            names = (entry.get("alias"), entry.get("preferred_name"))
            if any(name is not None and not isinstance(name, str) for name in names):
                raise CommandRejected(
                    INVALID_INPUT, f"参与者 {pid} 的别名或称呼必须为字符串",
                )
            alias = (names[0] or "").strip()
            preferred = (names[1] or "").strip()
            if not alias and not preferred:
                raise CommandRejected(
                    INVALID_INPUT, f"参与者 {pid} 缺少别名或称呼",
                )
            participants.append(Participant(
                id=pid,
                display_name=alias or preferred or f"Participant {pid}",
                alias=alias,
                preferred_name=preferred,
            ))

        self._state.participants = participants
        self._state.intake_index = 0
        self._set_phase(phases.INTAKE)
        return {"participants": [p.display_name for p in participants]}

    # ------------------------------------------------------------------
    # 叙述采集 / Narrative intake
    # ------------------------------------------------------------------

    def _submit_narrative(self, participant_id: int, text: str) -> Dict[str, Any]:
        self._require_phase(phases.INTAKE, phases.ALIGNMENT_REVIEW)
        participant = self._require_participant(participant_id)
        story = self._require_text(text, "叙述")
        s = self._state

        if s.phase == phases.INTAKE:
            current = s.participants[s.intake_index]
            is_turn = current.id == participant.id
            if not is_turn and participant.id not in s.narratives:
                raise CommandRejected(
                    OUT_OF_TURN,
                    f"当前轮到 {current.display_name} 陈述",
                )
            self._store_narrative(participant, story)
            if is_turn:
                self._advance_intake()
            return {"participant_id": participant.id}

        # ALIGNMENT_REVIEW：覆盖陈述并重建快照
        self._store_narrative(participant, story)
        s.signals[participant.id] = self._analyzer.signals_for(participant, story)
        self._rebuild_snapshot()
        return {"participant_id": participant.id, "snapshot_rebuilt": True}

    def _submit_capture(
        self, participant_id: int, capture: NarrativeCapture, fallback_text: str,
    ) -> Dict[str, Any]:
        self._require_phase(phases.INTAKE, phases.ALIGNMENT_REVIEW)
        story = capture.resolve(fallback_text)
        if not story:
            raise CommandRejected(
                CAPTURE_UNAVAILABLE,
                capture.error_message or "没有可用的叙述文本，请使用手动输入",
            )
        return self._submit_narrative(participant_id, story)

    def _skip_narrative(self, participant_id: int) -> Dict[str, Any]:
        self._require_phase(phases.INTAKE)
        participant = self._require_participant(participant_id)
        current = self._state.participants[self._state.intake_index]
        if current.id != participant.id:
            raise CommandRejected(
                OUT_OF_TURN, f"当前轮到 {current.display_name} 陈述",
            )
        logger.info(
            f"[{self._state.session_id}] 参与者 {participant.display_name} 跳过陈述"
        )
        self._advance_intake()
        return {"skipped": participant.id}

    def _store_narrative(self, participant: Participant, story: str) -> None:
        self._state.narratives[participant.id] = Narrative(
            participant_id=participant.id,
            text=story,
            captured_at=self._now().isoformat(),
        )

    def _advance_intake(self) -> None:
        s = self._state
        s.intake_index += 1
        if s.intake_index < len(s.participants):
            return
        self._set_phase(phases.ALIGNMENT_REVIEW)
        self._recompute_signals()
        self._rebuild_snapshot()

    def _recompute_signals(self) -> None:
        s = self._state
        s.signals = {
            p.id: self._analyzer.signals_for(p, s.narratives[p.id].text)
            for p in s.participants
            if p.id in s.narratives
        }

    def _ordered_signals(self) -> List[ParticipantSignals]:
        s = self._state
        return [s.signals[p.id] for p in s.participants if p.id in s.signals]

    def _rebuild_snapshot(self) -> None:
        self._state.conflict_snapshot = synthesize(
            self._ordered_signals(),
            high_intensity_threshold=self.config.high_intensity_threshold,
        )

    # ------------------------------------------------------------------
    # 快照确认 / Alignment review
    # ------------------------------------------------------------------

    def _edit_participant_signals(
        self, participant_id: int, patch: Mapping[str, Any],
    ) -> Dict[str, Any]:
        self._require_phase(phases.ALIGNMENT_REVIEW)
        self._require_participant(participant_id)
        current = self._state.signals.get(participant_id)
        if current is None:
            raise CommandRejected(
                INVALID_INPUT, f"参与者 {participant_id} 没有可编辑的信号（未陈述）",
            )
        if not isinstance(patch, Mapping) or not patch:
            raise CommandRejected(INVALID_INPUT, "信号补丁必须为非空映射")
        unknown = sorted(set(patch) - _SIGNAL_PATCH_FIELDS)
        if unknown:
            raise CommandRejected(INVALID_INPUT, f"不可编辑的信号字段: {unknown}")

        changes: Dict[str, Any] = {}
        for name, cap_field in _SIGNAL_LIST_FIELDS.items():
            if name not in patch:
                continue
            items = patch[name]
            if isinstance(items, str) or not isinstance(items, Sequence) or not all(
                isinstance(item, str) for item in items
            ):
                raise CommandRejected(INVALID_INPUT, f"{name} 必须为字符串列表")
            cleaned = [item.strip() for item in items if item.strip()]
            if name == "values":
                # 价值是类别集合：保留首次出现
                cleaned = list(dict.fromkeys(cleaned))
            changes[name] = cleaned[: getattr(self.config, cap_field)]

        if "dominant_emotion" in patch:
            emotion = patch["dominant_emotion"]
            if emotion not in self.lexicon.emotion_categories:
                raise CommandRejected(
                    INVALID_INPUT,
                    f"未知情绪类别: {emotion!r}"
                    f"（可用: {list(self.lexicon.emotion_categories)}）",
                )
            changes["dominant_emotion"] = emotion

        if "emotion_intensity" in patch:
            intensity = patch["emotion_intensity"]
            if isinstance(intensity, bool) or not isinstance(intensity, (int, float)) \
                    or intensity < 0:
                raise CommandRejected(INVALID_INPUT, "emotion_intensity 必须为非负数")
            changes["emotion_intensity"] = float(intensity)

        self._state.signals[participant_id] = replace(current, **changes)
        self._rebuild_snapshot()
        return {"participant_id": participant_id, "fields": sorted(changes)}

    def _approve_snapshot(self) -> None:
        self._require_phase(phases.ALIGNMENT_REVIEW)
        if self._state.conflict_snapshot is None:
            raise CommandRejected(TRANSITION_NOT_PERMITTED, "冲突快照尚未生成")
        self._state.snapshot_approved = True
        self._state.round = RoundState(phase=phases.ACKNOWLEDGMENT)
        self._set_phase(phases.ROUND)

    # ------------------------------------------------------------------
    # 调解轮次 / Mediation rounds
    # ------------------------------------------------------------------

    def _missing_responders(self, round_phase: str) -> List[Participant]:
        rnd = self._state.round
        return [
            p for p in self._state.participants
            if not rnd.has_response(round_phase, p.id)
        ]

    def _submit_round_response(
        self, round_phase: str, participant_id: int, text: str,
    ) -> Dict[str, Any]:
        self._require_phase(phases.ROUND)
        s = self._state
        if round_phase != s.round.phase:
            raise CommandRejected(
                TRANSITION_NOT_PERMITTED,
                f"当前轮次为 {s.round.phase}，不接受 {round_phase} 的发言",
            )
        if round_phase not in phases.DIALOGUE_PHASES:
            raise CommandRejected(
                INVALID_INPUT, "resolution 阶段请通过 select_proposal 选择方案",
            )
        participant = self._require_participant(participant_id)
        response = self._require_text(text, "发言")

        speaker = s.participants[s.round.current_index]
        if speaker.id != participant.id:
            raise CommandRejected(
                OUT_OF_TURN, f"当前轮到 {speaker.display_name} 发言",
            )

        s.round.responses[(round_phase, participant.id)] = response
        if s.round.current_index < len(s.participants) - 1:
            s.round.current_index += 1

        detail: Dict[str, Any] = {
            "phase": round_phase,
            "participant_id": participant.id,
        }
        result = self._detector.detect(response)
        if result.flagged:
            raised_at = self._clock()
            s.escalation.warning = EscalationWarning(
                participant_id=participant.id,
                phase=round_phase,
                trigger=result.trigger or "",
                raised_at=raised_at,
                expires_at=raised_at + self.config.escalation_warning_seconds,
            )
            logger.warning(
                f"[{s.session_id}] 检测到升级风险: participant={participant.id} "
                f"trigger={result.trigger!r}"
            )
            detail["event"] = "escalation_flagged"
            detail["trigger"] = result.trigger
            detail["reason"] = result.reason
        return detail

    def _complete_phase(self) -> Dict[str, Any]:
        self._require_phase(phases.ROUND)
        s = self._state
        current = s.round.phase

        if current in phases.DIALOGUE_PHASES:
            missing = self._missing_responders(current)
            if missing:
                raise CommandRejected(
                    TRANSITION_NOT_PERMITTED,
                    f"{current} 阶段尚缺发言: "
                    f"{', '.join(p.display_name for p in missing)}",
                )
            nxt = phases.next_round_phase(current)
            s.round.phase = nxt
            s.round.current_index = 0
            if nxt == phases.RESOLUTION:
                s.proposals = proposal_generator.generate(s.conflict_snapshot)
            logger.info(f"[{s.session_id}] 轮次推进: {current} -> {nxt}")
            return {"round_phase": nxt}

        if s.selected_proposal is None:
            raise CommandRejected(TRANSITION_NOT_PERMITTED, "尚未选择解决方案")
        s.resolution_draft = s.selected_proposal
        s.peace_pact = draft_peace_pact(
            s.participants,
            s.resolution_draft,
            s.session_id,
            facilitator_name=self.config.facilitator_name,
            today=self._today(),
        )
        self._set_phase(phases.DRAFT_REVIEW)
        return {"proposal_id": s.resolution_draft.id}

    def _select_proposal(self, proposal_id: int) -> Dict[str, Any]:
        self._require_phase(phases.ROUND)
        s = self._state
        if s.round.phase != phases.RESOLUTION:
            raise CommandRejected(
                TRANSITION_NOT_PERMITTED, "只有 resolution 阶段可以选择方案",
            )
        for proposal in s.proposals:
            if proposal.id == proposal_id:
                s.selected_proposal = proposal
                return {"proposal_id": proposal_id}
        raise CommandRejected(INVALID_INPUT, f"未知方案: {proposal_id!r}")

    # ------------------------------------------------------------------
    # 暂停与结束 / Pause & end
    # ------------------------------------------------------------------

    def _pause_session(self, reason: Optional[str]) -> Dict[str, Any]:
        self._require_phase(phases.ROUND)
        reason = (reason or "").strip() or self.config.default_pause_reason
        self._state.escalation.detected = True
        self._state.escalation.reason = reason
        self._set_phase(phases.PAUSED)
        return {"reason": reason, "round_phase": self._state.round.phase}

    def _resume_session(self) -> Dict[str, Any]:
        self._require_phase(phases.PAUSED)
        self._state.escalation.detected = False
        self._state.escalation.reason = None
        self._set_phase(phases.ROUND)
        return {"round_phase": self._state.round.phase}

    def _end_session(self) -> Dict[str, Any]:
        self._require_phase(phases.PAUSED)
        ended = self._state.session_id
        logger.info(f"[{ended}] 会话在暂停状态下被结束")
        self._reset_session()
        return {"event": "session_ended", "ended_session_id": ended}

    # ------------------------------------------------------------------
    # 协议草稿 / Draft review
    # ------------------------------------------------------------------

    def _edit_draft(self, new_text: str) -> None:
        self._require_phase(phases.DRAFT_REVIEW)
        self._state.peace_pact.content = self._require_text(new_text, "协议内容")

    def _approve_draft(self) -> None:
        self._require_phase(phases.DRAFT_REVIEW)
        self._state.complete = True
        self._set_phase(phases.COMPLETE)

    def _submit_feedback(
        self,
        rating: int,
        helpful: str,
        suggestions: str,
        would_recommend: Optional[bool],
    ) -> None:
        self._require_phase(phases.COMPLETE)
        if self._state.feedback is not None:
            raise CommandRejected(TRANSITION_NOT_PERMITTED, "反馈已提交")
        if isinstance(rating, bool) or not isinstance(rating, int) \
                or not 1 <= rating <= 5:
            raise CommandRejected(INVALID_INPUT, f"评分必须为 1-5 的整数: {rating!r}")
        self._state.feedback = SessionFeedback(
            rating=rating,
            helpful=(helpful or "").strip(),
            suggestions=(suggestions or "").strip(),
            would_recommend=would_recommend,
        )

    # ------------------------------------------------------------------
    # 重置 / Reset
    # ------------------------------------------------------------------

    def _reset_session(self) -> Dict[str, Any]:
        previous = self._state.session_id
        session_id = self._id_factory()
        while session_id == previous:
            session_id = self._id_factory()
        self._state = SessionState(session_id=session_id)
        logger.info(f"[{previous}] 会话已重置，新会话: {session_id}")
        return {"event": "session_reset", "previous_session_id": previous}

    def _expire_warning(self) -> None:
        warning = self._state.escalation.warning
        if warning is not None and not warning.is_active(self._clock()):
            self._state.escalation.warning = None
            logger.debug(f"[{self._state.session_id}] 风险提示已过期")
