# capture/
# 外部叙述生产者契约（语音转文字片段、错误词汇表、手动输入回退）。

from voicevault.capture.producer import (
    CAPTURE_ERROR_CODES,
    CaptureSegment,
    NarrativeCapture,
    error_message,
    normalize_error,
)

__all__ = [
    "CAPTURE_ERROR_CODES",
    "CaptureSegment",
    "NarrativeCapture",
    "error_message",
    "normalize_error",
]
