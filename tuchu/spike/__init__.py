"""
Layer 0: Spike, 脉冲事件与突触后接口

这是 tuchu 的最底层, 不依赖任何其他 tuchu 模块。

主要组件:
- SpikeEvent: 更新后分发给突触后目标的不可变事件
- PostsynapticTarget: 突触后单元的能力集协议
- supports_stdp: 能力集检查
"""

from tuchu.spike.spike import SpikeEvent
from tuchu.spike.history import PostsynapticTarget, supports_stdp

__all__ = [
    "SpikeEvent",
    "PostsynapticTarget",
    "supports_stdp",
]
