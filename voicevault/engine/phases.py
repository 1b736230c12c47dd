# phases.py
# =============================================================================
# 会话阶段与调解轮次定义。 / Session phases & mediation round definitions.
#
# 主线（线性）:
#   CONSENT_PENDING -> IDENTITY_SETUP -> INTAKE -> ALIGNMENT_REVIEW
#     -> ROUND(acknowledgment -> clarification -> resolution)
#     -> DRAFT_REVIEW -> COMPLETE
# 正交状态 PAUSED 只能从 ROUND 进入，恢复时回到原来的轮次子阶段。
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

# -----------------------------------------------------------------------------
# 会话阶段
# -----------------------------------------------------------------------------
CONSENT_PENDING = "CONSENT_PENDING"
IDENTITY_SETUP = "IDENTITY_SETUP"
INTAKE = "INTAKE"
ALIGNMENT_REVIEW = "ALIGNMENT_REVIEW"
ROUND = "ROUND"
PAUSED = "PAUSED"
DRAFT_REVIEW = "DRAFT_REVIEW"
COMPLETE = "COMPLETE"

# -----------------------------------------------------------------------------
# 轮次子阶段
# -----------------------------------------------------------------------------
ACKNOWLEDGMENT = "acknowledgment"
CLARIFICATION = "clarification"
RESOLUTION = "resolution"

ROUND_ORDER = (ACKNOWLEDGMENT, CLARIFICATION, RESOLUTION)

# 需要每位参与者发言的子阶段
DIALOGUE_PHASES = (ACKNOWLEDGMENT, CLARIFICATION)


def next_round_phase(phase: str) -> Optional[str]:
    """返回下一个轮次子阶段；resolution 之后返回 None。"""
    index = ROUND_ORDER.index(phase)
    if index + 1 < len(ROUND_ORDER):
        return ROUND_ORDER[index + 1]
    return None


@dataclass(frozen=True)
class PhaseInstruction:
    """调解员在每个轮次子阶段给出的引导语。"""

    title: str
    instruction: str
    prompt: str


PHASE_INSTRUCTIONS: Dict[str, PhaseInstruction] = {
    ACKNOWLEDGMENT: PhaseInstruction(
        title="Acknowledgment Phase",
        instruction=(
            "Let's start by acknowledging each other. Please reflect on "
            "what you heard from the other person."
        ),
        prompt=(
            "What did you hear from their perspective? What can you "
            "acknowledge about their experience?"
        ),
    ),
    CLARIFICATION: PhaseInstruction(
        title="Clarification Phase",
        instruction="Now, let's clarify any misunderstandings.",
        prompt=(
            "Is there anything you'd like to ask or explain? What would "
            "help the other person understand your perspective better?"
        ),
    ),
    RESOLUTION: PhaseInstruction(
        title="Resolution Proposals",
        instruction=(
            "Based on what I've heard, here are some neutral ideas for "
            "moving forward."
        ),
        prompt=(
            "Which approach feels right to you? Feel free to suggest "
            "modifications or your own ideas."
        ),
    ),
}
