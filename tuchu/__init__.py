"""
tuchu (突触) 事件驱动 STDP 突触

分层:
  Layer 0  tuchu.spike    SpikeEvent + 突触后能力集协议
  Layer 1  tuchu.synapse  连接簿记 + Guetig STDP 规则 + STDPConnection
"""

from tuchu.errors import (
    TuchuError,
    ConfigurationError,
    SequencingError,
    IllegalConnectionError,
)
from tuchu.spike import SpikeEvent, PostsynapticTarget, supports_stdp
from tuchu.synapse import (
    STDPConnection,
    STDPParams,
    GuetigSTDP,
    PointerTarget,
    IndexTarget,
    NodeTable,
)

__version__ = "0.1.0"

__all__ = [
    "TuchuError",
    "ConfigurationError",
    "SequencingError",
    "IllegalConnectionError",
    "SpikeEvent",
    "PostsynapticTarget",
    "supports_stdp",
    "STDPConnection",
    "STDPParams",
    "GuetigSTDP",
    "PointerTarget",
    "IndexTarget",
    "NodeTable",
]
