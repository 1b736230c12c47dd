# errors.py
# =============================================================================
# 命令结果与拒绝原因码。
#
# 命令前置条件不满足时引擎不抛异常，而是返回 accepted=False 的 CommandResult，
# 由调用方（UI）以“不允许的转换”呈现。
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from voicevault.primitives.models import SessionState


# -----------------------------------------------------------------------------
# 拒绝原因码
# -----------------------------------------------------------------------------
TRANSITION_NOT_PERMITTED = "TRANSITION_NOT_PERMITTED"
INVALID_INPUT = "INVALID_INPUT"
UNKNOWN_PARTICIPANT = "UNKNOWN_PARTICIPANT"
OUT_OF_TURN = "OUT_OF_TURN"
CAPTURE_UNAVAILABLE = "CAPTURE_UNAVAILABLE"


class CommandRejected(Exception):
    """引擎内部用于中止命令的信号，不会传播到调用方。"""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


@dataclass(frozen=True)
class CommandResult:
    """一条命令的执行结果。 state 为执行后的会话状态副本。"""

    accepted: bool
    command: str
    state: SessionState
    code: Optional[str] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.accepted
