# engine/__init__.py
# =============================================================================
# 调解会话引擎：状态机、阶段定义与协议草稿。
# =============================================================================

from voicevault.engine.errors import CommandResult
from voicevault.engine.session import MediationSession, StateListener

__all__ = [
    "CommandResult",
    "MediationSession",
    "StateListener",
]
