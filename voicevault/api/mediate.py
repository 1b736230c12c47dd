# mediate.py
# =============================================================================
# 公共 API：调解会话入口。
#
# 提供 open_session() 一键创建函数：加载配置与词表，组装分析器和检测器，
# 返回可直接接收 UI 命令的 MediationSession。
# =============================================================================

"""公共 API：调解会话入口。"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from voicevault.analysis.escalation import EscalationDetector
from voicevault.analysis.narrative import NarrativeAnalyzer
from voicevault.config import SessionConfigLoader
from voicevault.engine.session import MediationSession, StateListener
from voicevault.lexicon.loader import LexiconLoader

logger = logging.getLogger(__name__)


def open_session(
    config: Optional[Dict[str, Any]] = None,
    config_file: Optional[str] = None,
    lexicon_file: Optional[str] = None,
    on_change: Optional[StateListener] = None,
    analyzer: Optional[Any] = None,
    detector: Optional[Any] = None,
) -> MediationSession:
    """一键创建调解会话。

    参数：
        config: 会话配置字典（最高优先级），键与 SessionConfig 字段一致。
        config_file: 会话配置文件路径（可选，不传则自动搜索 voicevault.yaml）。
        lexicon_file: 自定义词表 YAML 路径（可选）。优先于配置中的
            lexicon_file 字段。
        on_change: 状态变更回调。每条命令执行后以 SessionEvent 调用一次，
            适用于 UI 渲染、WebSocket 推送等场景。
        analyzer: 替换默认的词表叙述分析器（需实现 analyze /
            classify_emotion / signals_for）。
        detector: 替换默认的词表升级检测器（需实现 detect）。

    返回：
        处于 CONSENT_PENDING 阶段的 MediationSession。

    Raises:
        ConfigurationError: 配置非法。
        LexiconValidationError: 词表文件不存在或结构非法。
    """
    # 1. 解析配置
    session_config = SessionConfigLoader(
        config=config, config_file=config_file,
    ).resolve()

    # 2. 加载词表
    lexicon = LexiconLoader().load(lexicon_file or session_config.lexicon_file)

    # 3. 组装分类器（允许外部替换）
    analyzer = analyzer or NarrativeAnalyzer(lexicon, session_config)
    detector = detector or EscalationDetector(lexicon)

    session = MediationSession(
        config=session_config,
        lexicon=lexicon,
        analyzer=analyzer,
        detector=detector,
        on_change=on_change,
    )
    logger.info(
        "调解会话已就绪: session_id=%s participants=%d-%d",
        session.session_id,
        session_config.min_participants,
        session_config.max_participants,
    )
    return session
