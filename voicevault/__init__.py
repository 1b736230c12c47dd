# voicevault/__init__.py
# =============================================================================
# Voice Vault：多方冲突调解会话引擎。 / Multi-party conflict mediation session engine.
# =============================================================================

"""Voice Vault：多方冲突调解会话引擎。 / Multi-party conflict mediation session engine."""

from voicevault.api.mediate import open_session
from voicevault.engine.session import MediationSession

__version__ = "0.1.0"
__all__ = ["open_session", "MediationSession", "__version__"]
