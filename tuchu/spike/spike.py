"""
Layer 0: SpikeEvent 事件定义

突触完成权重更新后, 向突触后目标分发一个 SpikeEvent:
- 时间戳 (突触前脉冲时间, ms)
- 更新后的突触权重
- 传导延迟 (时间步)
- 接收端口 (receptor port)

事件只在分发时创建一次, 之后不可修改。
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpikeEvent:
    """单个已加权的脉冲事件

    frozen=True 确保事件一旦创建不可修改 (事件不可变)。
    slots=True 优化内存使用 (每个突触前脉冲 × 扇出 都会创建一个)。

    Attributes:
        timestamp: 突触前脉冲时间 (ms)
        weight: 本次更新后的突触权重
        delay_steps: 传导延迟 (时间步)
        rport: 突触后接收端口
    """
    timestamp: float
    weight: float
    delay_steps: int = 1
    rport: int = 0
