"""
Layer 1: Synapse, 连接簿记与 STDP 突触

- Connection: 连接基类 (延迟 / 接收端口 / 目标句柄)
- PointerTarget / IndexTarget / NodeTable: 可替换的目标寻址策略
- STDPConnection: 事件驱动的 Guetig STDP 突触

可塑性规则:
  - GuetigSTDP: 加性 / 乘性 / 插值权重依赖
"""

from tuchu.synapse.addressing import (
    NodeTable,
    PointerTarget,
    IndexTarget,
)

from tuchu.synapse.connection import Connection

from tuchu.synapse.stdp_connection import STDPConnection

from tuchu.synapse.plasticity import (
    PlasticityRule,
    GuetigSTDP,
    STDPParams,
    MULTIPLICATIVE_STDP_PARAMS,
    ADDITIVE_STDP_PARAMS,
    GUETIG_STDP_PARAMS,
    VAN_ROSSUM_STDP_PARAMS,
)

__all__ = [
    # 连接
    "Connection",
    "STDPConnection",
    # 寻址
    "NodeTable",
    "PointerTarget",
    "IndexTarget",
    # 可塑性规则
    "PlasticityRule",
    "GuetigSTDP",
    "STDPParams",
    "MULTIPLICATIVE_STDP_PARAMS",
    "ADDITIVE_STDP_PARAMS",
    "GUETIG_STDP_PARAMS",
    "VAN_ROSSUM_STDP_PARAMS",
]
