"""
Layer 0: 突触后能力集协议

STDP 突触只通过这四个方法与突触后单元交互:
  query_history(t1, t2)        → (t1, t2] 内的突触后脉冲时间, 严格递增
  get_decayed_count(t)         → t 时刻突触后脉冲的衰减计数 (K-)
  register_stdp_connection(t)  → 连接验证时登记, t 之前的历史视为已读
  deliver(event)               → 接收更新后的脉冲事件

使用 Protocol 实现依赖反转:
- spike/ (Layer 0) 定义接口
- 任意突触后单元类型天然满足此接口 (结构化子类型)
- synapse/ 只依赖这个接口, 从不依赖具体单元类型

脉冲历史存档本身 (引用计数, 剪枝) 属于宿主仿真器, 不在本包内实现。
"""

from typing import Protocol, Sequence, runtime_checkable

from tuchu.spike.spike import SpikeEvent


@runtime_checkable
class PostsynapticTarget(Protocol):
    """能接收 STDP 连接的突触后单元"""

    def query_history(self, t1: float, t2: float) -> Sequence[float]: ...

    def get_decayed_count(self, t: float) -> float: ...

    def register_stdp_connection(self, t_first_read: float) -> None: ...

    def deliver(self, event: SpikeEvent) -> None: ...


def supports_stdp(node) -> bool:
    """node 是否实现了完整的 STDP 能力集"""
    return isinstance(node, PostsynapticTarget)
