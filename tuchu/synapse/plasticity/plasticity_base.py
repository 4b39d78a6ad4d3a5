"""
可塑性规则基类

定义权重依赖型配对规则的统一接口。
规则对象是参数容器 + 计算方法,
状态 (weight, 突触前痕迹 Kplus) 存储在连接对象中。

依赖约束:
- 不依赖 stdp_connection.py (避免循环依赖)
- 不依赖 spike/ 的突触后协议
"""

from abc import ABC, abstractmethod
import math


class PlasticityRule(ABC):
    """权重依赖型 STDP 规则基类

    规则负责计算, 状态由连接维护。

    使用模式:
        rule = GuetigSTDP(STDPParams(mu_plus=0.0, mu_minus=0.0))
        w = rule.facilitate(w, kplus * math.exp(minus_dt / tau_plus))
        w = rule.depress(w, k_minus)
    """

    @abstractmethod
    def facilitate(self, w: float, k: float) -> float:
        """单个突触后脉冲引起的增强 (LTP)

        Args:
            w: 当前权重
            k: 突触前痕迹在该突触后脉冲时刻的值 (已含指数核)

        Returns:
            新权重, 不小于 w
        """
        raise NotImplementedError

    @abstractmethod
    def depress(self, w: float, k: float) -> float:
        """单个突触前脉冲引起的抑制 (LTD)

        Args:
            w: 当前权重
            k: 突触后脉冲衰减计数 (K-)

        Returns:
            新权重, 不大于 w
        """
        raise NotImplementedError

    # =========================================================================
    # 工具方法
    # =========================================================================

    @staticmethod
    def decay_trace(trace: float, dt: float, tau: float) -> float:
        """痕迹指数衰减 dt 毫秒: trace · exp(-dt / τ)"""
        return trace * math.exp(-dt / tau)
