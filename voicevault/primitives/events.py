# events.py
# =============================================================================
# 会话状态事件：每条命令执行后推送给外部 UI 层。
# / Session events pushed to the surrounding UI layer after every command.
# =============================================================================

"""Session state events for external integration."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from voicevault.primitives.models import SessionState


@dataclass
class SessionEvent:
    """命令执行后的结构化状态事件。

    外部应用通过 on_change 回调接收此类事件，据此渲染当前阶段。
    state 为会话状态的深拷贝，修改它不会影响引擎。

    Attributes:
        type: 事件类型。
            - "state_changed": 命令被接受，状态已更新
            - "command_rejected": 命令前置条件不满足，状态未变
            - "escalation_flagged": 轮次发言命中风险用语
            - "session_ended": 暂停状态下显式结束会话（随后重置）
            - "session_reset": 会话被重置
        phase: 事件产生后的会话阶段。
        session_id: 会话标识（重置后为新值）。
        timestamp: 事件产生时的单调时钟（秒）。
        state: 只读的 SessionState 副本。
        command: 触发事件的命令名。
        detail: 事件附加数据，结构因 type 而异。
    """

    type: str
    phase: str
    session_id: str
    state: SessionState
    command: str = ""
    timestamp: float = field(default_factory=time.monotonic)
    detail: Optional[Dict[str, Any]] = None
