"""
Layer 1: 突触可塑性规则模块

- PlasticityRule: 基类 (抽象接口: facilitate / depress)
- GuetigSTDP: 权重依赖指数可调的 STDP (加性/乘性/插值)
- STDPParams: 规则参数 + 四个文献预设

依赖约束:
- 只依赖 tuchu.errors
- 不依赖 stdp_connection.py (避免循环依赖)
"""

from tuchu.synapse.plasticity.plasticity_base import PlasticityRule
from tuchu.synapse.plasticity.guetig_stdp import (
    GuetigSTDP,
    STDPParams,
    STATUS_FIELDS,
    MULTIPLICATIVE_STDP_PARAMS,
    ADDITIVE_STDP_PARAMS,
    GUETIG_STDP_PARAMS,
    VAN_ROSSUM_STDP_PARAMS,
)

__all__ = [
    "PlasticityRule",
    "GuetigSTDP",
    "STDPParams",
    "STATUS_FIELDS",
    "MULTIPLICATIVE_STDP_PARAMS",
    "ADDITIVE_STDP_PARAMS",
    "GUETIG_STDP_PARAMS",
    "VAN_ROSSUM_STDP_PARAMS",
]
