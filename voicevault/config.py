# config.py
# =============================================================================
# 会话配置加载与合并模块 / Session config loading & merging module
#
# 职责 / Responsibilities:
#   - 定义会话引擎的可调参数（SessionConfig）
#     / Define the tunable parameters of the session engine (SessionConfig)
#   - 实现三层优先级配置加载：代码传入 > 配置文件 > 内置默认值
#     / Three-tier priority loading: code > config file > built-in defaults
#   - 配置文件中可通过 ${VAR} / ${VAR:-default} 引用环境变量
#     / Config files may reference env vars via ${VAR} / ${VAR:-default}
# =============================================================================

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """会话配置缺失或非法。 / Session configuration missing or invalid."""


# =============================================================================
# 数据结构 / Data Structures
# =============================================================================


@dataclass(frozen=True)
class SessionConfig:
    """会话引擎配置。 / Session engine configuration."""

    # --- 参与者 / Participants ---
    min_participants: int = 2
    max_participants: int = 6

    # --- 叙述分析上限 / Narrative analysis caps ---
    max_pain_points: int = 3
    max_values: int = 3
    max_needs: int = 3

    # --- 情绪 / Emotion ---
    # intensity = 最大关键词计数 / intensity_scale，默认不截断到 1.0
    # / intensity = max keyword count / intensity_scale; unclamped by default
    intensity_scale: float = 10.0
    clamp_intensity: bool = False
    high_intensity_threshold: float = 0.5

    # 同一句命中多个意图短语时是否去重 / Dedupe needs matching several intent phrases
    dedupe_needs: bool = False

    # --- 升级监测 / Escalation ---
    escalation_warning_seconds: float = 5.0
    default_pause_reason: str = (
        "Heightened emotions detected - session paused for cooling down"
    )

    # --- 协议草稿 / Agreement draft ---
    facilitator_name: str = "Grace"

    # --- 可选：自定义词表文件 / Optional: custom lexicon file ---
    lexicon_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionConfig:
        """从字典构建配置，忽略未知键并做类型转换。 / Build from dict; unknown keys ignored."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.warning("忽略未知配置项: %s", unknown)

        kwargs: Dict[str, Any] = {}
        for name, value in data.items():
            if name not in known or value is None:
                continue
            default = known[name].default
            kwargs[name] = _coerce(name, value, default)

        config = cls(**kwargs)
        config.validate()
        return config

    def validate(self) -> None:
        """校验取值范围。 / Validate value ranges.

        Raises:
            ConfigurationError: 参数越界。 / Parameter out of range.
        """
        if self.min_participants < 2:
            raise ConfigurationError(
                f"min_participants 至少为 2，实际: {self.min_participants}"
            )
        if self.max_participants < self.min_participants:
            raise ConfigurationError(
                f"max_participants ({self.max_participants}) "
                f"小于 min_participants ({self.min_participants})"
            )
        for cap in ("max_pain_points", "max_values", "max_needs"):
            if getattr(self, cap) < 0:
                raise ConfigurationError(f"{cap} 不能为负数")
        if self.intensity_scale <= 0:
            raise ConfigurationError(
                f"intensity_scale 必须为正数，实际: {self.intensity_scale}"
            )
        if self.escalation_warning_seconds < 0:
            raise ConfigurationError("escalation_warning_seconds 不能为负数")


def _coerce(name: str, value: Any, default: Any) -> Any:
    """按默认值类型转换 YAML / 环境变量中的取值。"""
    try:
        if isinstance(default, bool):
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in ("true", "1", "yes", "on"):
                    return True
                if lowered in ("false", "0", "no", "off"):
                    return False
                raise ValueError(value)
            return bool(value)
        if isinstance(default, int):
            if isinstance(value, bool):
                raise ValueError(value)
            return int(value)
        if isinstance(default, float):
            return float(value)
        return str(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"配置项 '{name}' 取值非法: {value!r}"
        ) from exc


# =============================================================================
# 配置加载器 / Config Loader
# =============================================================================


class SessionConfigLoader:
    """会话配置加载器：实现三层优先级配置合并。
    / Session config loader - three-tier priority merging.

    优先级（高→低） / Priority (high→low):
    1. 代码传入（config 字典参数） / Code-level config dict
    2. 配置文件（YAML） / Config file (YAML)
    3. SessionConfig 内置默认值 / SessionConfig defaults
    """

    # 配置文件搜索路径（按优先级） / Config file search paths (by priority)
    _CONFIG_SEARCH_PATHS = [
        "voicevault.yaml",
        "voicevault.yml",
        "config/voicevault.yaml",
        "config/voicevault.yml",
    ]

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
    ):
        self._code_config = config or {}
        self._file_config: Dict[str, Any] = {}
        self._load_config_file(config_file)

    def _load_config_file(self, config_file: Optional[str]) -> None:
        """加载配置文件（YAML）。 / Load config file (YAML)."""
        if config_file:
            path = Path(config_file)
            if path.exists():
                self._file_config = self._read_yaml(path)
                logger.info("会话配置文件已加载: %s", path)
            else:
                logger.warning("指定的会话配置文件不存在: %s", path)
            return

        # 自动搜索默认路径 / Auto-search default paths
        for search_path in self._CONFIG_SEARCH_PATHS:
            path = Path(search_path)
            if path.exists():
                self._file_config = self._read_yaml(path)
                logger.info("自动发现会话配置文件: %s", path)
                return

        logger.debug("未发现会话配置文件，使用内置默认值")

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """读取 YAML 文件并展开环境变量引用。 / Read YAML and expand env var refs."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    f"会话配置文件解析失败: {path}: {exc}"
                ) from exc

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"会话配置文件必须为字典，实际类型: {type(raw).__name__}"
            )
        return _expand_env_vars(raw)

    def resolve(self) -> SessionConfig:
        """合并各层配置并返回 SessionConfig。 / Merge all layers into a SessionConfig."""
        merged: Dict[str, Any] = {}
        merged.update({k: v for k, v in self._file_config.items() if v is not None})
        merged.update({k: v for k, v in self._code_config.items() if v is not None})
        return SessionConfig.from_dict(merged)


# =============================================================================
# 工具函数 / Utility Functions
# =============================================================================


def _expand_env_vars(obj: Any) -> Any:
    """递归展开字典/列表中的 ${ENV_VAR} 引用。 / Recursively expand ${ENV_VAR} refs in dicts/lists.

    支持格式 / Supported formats:
    - ${VAR_NAME}          → os.environ["VAR_NAME"]
    - ${VAR_NAME:-default} → os.environ.get("VAR_NAME", "default")
    """
    if isinstance(obj, str):

        def _replace(match):
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return os.environ.get(var_name.strip(), default.strip())
            return os.environ.get(var_expr.strip(), match.group(0))

        return re.sub(r"\$\{([^}]+)\}", _replace, obj)

    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj
