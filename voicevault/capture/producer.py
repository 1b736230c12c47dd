# producer.py
# =============================================================================
# 外部叙述生产者契约：语音转文字在引擎之外完成，引擎只关心“文本已可用”。
# / External narrative producer contract. Speech-to-text happens outside the
#   engine; the engine only cares that text became available.
#
# 生产者依次推送增量（interim）与最终（final）文本片段，或推送一个固定词汇表
# 中的错误码。任何错误都意味着“没有可用叙述”，调用方必须回退到手动文本输入。
# =============================================================================

"""叙述采集契约。 / Narrative capture contract."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncIterable, Dict, Optional

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# 错误码（固定词汇表）
# -----------------------------------------------------------------------------
NOT_SUPPORTED = "not_supported"
MICROPHONE_PERMISSION_DENIED = "microphone_permission_denied"
NO_SPEECH_DETECTED = "no_speech_detected"
NO_MICROPHONE_FOUND = "no_microphone_found"
NETWORK_ERROR = "network_error"
TIMEOUT = "timeout"
RECOGNITION_ABORTED = "recognition_aborted"
RECOGNITION_ERROR = "recognition_error"

CAPTURE_ERROR_CODES = (
    NOT_SUPPORTED,
    MICROPHONE_PERMISSION_DENIED,
    NO_SPEECH_DETECTED,
    NO_MICROPHONE_FOUND,
    NETWORK_ERROR,
    TIMEOUT,
    RECOGNITION_ABORTED,
    RECOGNITION_ERROR,
)

# 旧版生产者使用的别名
_ERROR_ALIASES: Dict[str, str] = {
    "microphone_access_denied": MICROPHONE_PERMISSION_DENIED,
}

CAPTURE_ERROR_MESSAGES: Dict[str, str] = {
    NOT_SUPPORTED: (
        "Your browser doesn't support voice recording. "
        "Please use the text input below."
    ),
    MICROPHONE_PERMISSION_DENIED: (
        "Microphone access was denied. Please enable microphone permissions "
        "in your browser settings, or use the text input below."
    ),
    NO_SPEECH_DETECTED: (
        "No speech was detected. Please try speaking again or use the text "
        "input below."
    ),
    NO_MICROPHONE_FOUND: (
        "No microphone was found. Please check your microphone connection "
        "or use the text input below."
    ),
    NETWORK_ERROR: (
        "Network error occurred. Please check your connection and try again."
    ),
    TIMEOUT: (
        "Recording timed out. Please try again or use the text input below."
    ),
    RECOGNITION_ABORTED: "Recording was interrupted. Please try again.",
    RECOGNITION_ERROR: (
        "Voice recording encountered an issue. Please try again or use the "
        "text input below."
    ),
}

# 出现这些错误时应直接展示文本输入框
TEXT_INPUT_ERRORS = (NOT_SUPPORTED, MICROPHONE_PERMISSION_DENIED)


def normalize_error(code: Optional[str]) -> str:
    """把生产者上报的错误码归一化到固定词汇表，未知码归为 recognition_error。"""
    if not code:
        return RECOGNITION_ERROR
    code = _ERROR_ALIASES.get(code, code)
    if code not in CAPTURE_ERROR_CODES:
        logger.debug("未知采集错误码 '%s'，归为 %s", code, RECOGNITION_ERROR)
        return RECOGNITION_ERROR
    return code


def error_message(code: Optional[str]) -> str:
    return CAPTURE_ERROR_MESSAGES[normalize_error(code)]


@dataclass(frozen=True)
class CaptureSegment:
    """生产者推送的一个片段：文本片段或错误信号。"""

    text: str = ""
    is_final: bool = False
    error: Optional[str] = None


class NarrativeCapture:
    """单次采集会话的文本累积器。

    最终片段按到达顺序拼接（每段后追加一个空格），增量片段只保留最新一条。
    在提交之前以最后一次写入为准，不要求任何其他顺序保证。
    """

    def __init__(self) -> None:
        self._final = ""
        self._interim = ""
        self._error: Optional[str] = None

    @property
    def final_text(self) -> str:
        return self._final.strip()

    @property
    def interim_text(self) -> str:
        return self._interim

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def error_message(self) -> Optional[str]:
        if self._error is None:
            return None
        return CAPTURE_ERROR_MESSAGES[self._error]

    @property
    def needs_fallback(self) -> bool:
        """出错且没有任何已确认文本时，需要回退到手动输入。"""
        return self._error is not None and not self.final_text

    @property
    def show_text_input(self) -> bool:
        return self._error in TEXT_INPUT_ERRORS

    def on_segment(self, text: str, is_final: bool = False) -> None:
        if is_final:
            if text:
                self._final += text + " "
            self._interim = ""
        else:
            self._interim = text or ""

    def on_error(self, code: Optional[str]) -> None:
        self._error = normalize_error(code)
        self._interim = ""
        logger.warning("叙述采集失败: %s", self._error)

    def edit(self, text: str) -> None:
        """参与者手动修改已确认的转写文本。"""
        self._final = text or ""

    def apply(self, segment: CaptureSegment) -> None:
        if segment.error is not None:
            self.on_error(segment.error)
        else:
            self.on_segment(segment.text, segment.is_final)

    async def consume(self, segments: AsyncIterable[CaptureSegment]) -> str:
        """消费生产者的异步片段流，返回最终确认文本。"""
        async for segment in segments:
            self.apply(segment)
        return self.final_text

    def resolve(self, fallback_text: str = "") -> str:
        """确定用于提交的叙述：已确认转写优先，否则使用手动输入。"""
        return self.final_text or (fallback_text or "").strip()

    def reset(self) -> None:
        self._final = ""
        self._interim = ""
        self._error = None
