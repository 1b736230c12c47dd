#!/usr/bin/env python3
"""Two-party mediation walkthrough: consent through feedback.

Drives a scripted Alex / Jordan session through the public API and prints the
event stream, the conflict snapshot and the final Peace Pact.

Usage:
    python examples/e2e_two_party_session.py
    python examples/e2e_two_party_session.py --lexicon examples/lexicon_override.yaml
    python examples/e2e_two_party_session.py --pause
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Project root (examples/ is one level below repo root)
REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from voicevault import open_session  # noqa: E402
from voicevault.engine import phases  # noqa: E402
from voicevault.primitives.events import SessionEvent  # noqa: E402

_PHASE_CN = {
    phases.CONSENT_PENDING: "知情同意",
    phases.IDENTITY_SETUP: "身份注册",
    phases.INTAKE: "叙述采集",
    phases.ALIGNMENT_REVIEW: "快照确认",
    phases.ROUND: "调解轮次",
    phases.PAUSED: "暂停",
    phases.DRAFT_REVIEW: "协议草稿",
    phases.COMPLETE: "完成",
}

NARRATIVES = {
    1: "I am so frustrated and I need more respect. I hope we can talk calmly.",
    2: "I feel hurt and sad. I want respect and honesty from you.",
}

RESPONSES = {
    phases.ACKNOWLEDGMENT: {
        1: "You never listen to me.",
        2: "I hear that you feel unheard and frustrated.",
    },
    phases.CLARIFICATION: {
        1: "I meant that I feel ignored when plans change.",
        2: "Thank you, I did not know the changes felt that way.",
    },
}


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


def print_event(event: SessionEvent) -> None:
    """终端事件回调。 Plug into ``open_session(on_change=...)``."""
    phase_cn = _PHASE_CN.get(event.phase, event.phase)
    detail = event.detail or {}
    if event.type == "command_rejected":
        print(f"  ✗ {event.command} 被拒绝 ({detail.get('code')}): {detail.get('message')}")
    elif event.type == "escalation_flagged":
        print(f"  ⚠ {event.command} — 风险用语: '{detail.get('trigger')}'")
    elif event.type in ("session_ended", "session_reset"):
        print(f"  ↺ {event.type} — 新会话 {event.session_id}")
    else:
        print(f"  ✓ {event.command} → {phase_cn}")


def print_snapshot(session) -> None:
    snapshot = session.state.conflict_snapshot
    print("\n── 冲突快照 ──")
    print(f"  共同价值: {', '.join(snapshot.common_values) or '（无）'}")
    for entry in snapshot.per_participant_needs:
        print(f"  {entry.participant_name} 的需求: {list(entry.needs)}")
    pattern = snapshot.emotional_pattern
    print(f"  情绪: {list(pattern.dominant_emotions)}  基调: {pattern.overall_tone}")
    for item in snapshot.opportunities:
        print(f"  机会: {item}")
    print()


def run(lexicon_file: Optional[str] = None, pause: bool = False) -> None:
    session = open_session(lexicon_file=lexicon_file, on_change=print_event)
    print(f"会话 {session.session_id} 已创建\n")

    session.give_consent({
        "emotional_safety": True,
        "voice_transcription": True,
        "ai_arbitration": True,
        "privacy_policy": True,
    })
    session.register_participants([{"alias": "Alex"}, {"preferred_name": "Jordan"}])
    for pid, story in NARRATIVES.items():
        session.submit_narrative(pid, story)

    print_snapshot(session)
    session.approve_snapshot()

    for round_phase in phases.DIALOGUE_PHASES:
        print(f"\n── {session.current_instruction().title} ──")
        for pid, text in RESPONSES[round_phase].items():
            session.submit_round_response(round_phase, pid, text)
            if pause and session.escalation_warning_active():
                session.pause_session()
                session.resume_session()
        session.complete_phase()

    print(f"\n── {session.current_instruction().title} ──")
    for proposal in session.state.proposals:
        print(f"  [{proposal.id}] {proposal.title}: {proposal.description}")
    session.select_proposal(2)
    session.complete_phase()

    print("\n" + session.state.peace_pact.content + "\n")
    session.approve_draft()
    session.submit_feedback(5, helpful="Clear next steps", would_recommend=True)


def main() -> None:
    setup_logging()
    parser = argparse.ArgumentParser(
        description="Voice Vault 两方调解示例 / Two-party mediation walkthrough",
    )
    parser.add_argument(
        "--lexicon",
        default=None,
        help="自定义词表 YAML（默认使用内置词表）",
    )
    parser.add_argument(
        "--pause",
        action="store_true",
        help="出现风险提示时暂停冷静后再恢复",
    )
    args = parser.parse_args()
    run(lexicon_file=args.lexicon, pause=args.pause)


if __name__ == "__main__":
    main()
