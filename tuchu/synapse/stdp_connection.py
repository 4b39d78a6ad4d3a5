"""
Layer 1: 事件驱动 STDP 突触

每条有向 pre→post 连接一个 STDPConnection。
权重只在突触前脉冲到达时更新, 用的是上一个突触前脉冲以来的突触后历史:

  突触前脉冲到达 (t_spike, 上次为 t_lastspike, 树突延迟 d)
    1. 查询突触后历史 (t_lastspike - d, t_spike - d]          ← 每个脉冲恰好一次
    2. 每个突触后脉冲 t_post 一次增强:
         minus_dt = t_lastspike - (t_post + d)
         minus_dt == 0 → 跳过 (登记/上次更新时已计入, 防止边界重复计数)
         w ← facilitate(w, Kplus · exp(minus_dt / τ+))
    3. 当前突触前脉冲一次抑制:
         w ← depress(w, K-(t_spike - d))   K- 由突触后单元提供
    4. 以新权重分发 SpikeEvent (延迟步数 + 接收端口)
    5. Kplus ← Kplus · exp((t_lastspike - t_spike) / τ+) + 1

线程模型: 每个突触只被负责投递其突触前脉冲的那个线程更新,
宿主保证不会并发调用同一实例, 因此这里没有任何锁。
"""

import copy
import logging
import math
import sys
from typing import Dict, Mapping, Optional

import numpy as np

from tuchu.errors import ConfigurationError, IllegalConnectionError, SequencingError
from tuchu.spike.spike import SpikeEvent
from tuchu.synapse.connection import Connection, _real
from tuchu.synapse.plasticity.guetig_stdp import GuetigSTDP, STDPParams, STATUS_FIELDS

logger = logging.getLogger(__name__)

# 突触后历史超过这个长度时用 numpy 一次算完所有指数核
_VECTORIZE_THRESHOLD = 64

# get_status 会返回但 set_status 忽略的只读键
_READ_ONLY_KEYS = ('size_of',)


class STDPConnection(Connection):
    """Guetig STDP 突触

    Attributes (只读属性):
        weight: 当前突触权重, 有效范围 [0, Wmax]
        kplus:  突触前痕迹, 指数衰减 + 每个突触前脉冲 +1
        params: 当前 STDPParams
    """

    __slots__ = ('_weight', '_kplus', 'rule')

    SETTABLE_KEYS = frozenset(
        ('weight',) + tuple(STATUS_FIELDS) + Connection.BASE_STATUS_KEYS
    )

    def __init__(
        self,
        weight: float = 1.0,
        params: STDPParams = None,
        addressing=None,
        delay: float = 1.0,
        receptor: int = 0,
        resolution: float = 1.0,
    ):
        super().__init__(addressing, delay, receptor, resolution)
        self._weight = float(weight)
        self._kplus = 0.0
        # 每个突触一个规则对象; STDPParams 本身是 frozen 的, 可安全共享
        self.rule = GuetigSTDP(params if params is not None else STDPParams())

    # =========================================================================
    # 连接验证 / 登记
    # =========================================================================

    def check_connection(self, target, receptor_type: Optional[int] = None,
                         t_lastspike: float = 0.0, thread: int = 0) -> None:
        """验证目标并向其脉冲历史登记

        登记时间为 t_lastspike - 树突延迟: 该时刻及之前的历史条目
        被标记为已读, 之后的查询区间 (t_lastspike - d, ...] 天然排除它们。

        Raises:
            IllegalConnectionError: 目标不具备 STDP 能力集
        """
        self.check_connection_(target, receptor_type, thread)
        t_first_read = t_lastspike - self.get_delay()
        target.register_stdp_connection(t_first_read)
        logger.debug("STDP 连接登记: target=%r, t_first_read=%s",
                     target, t_first_read)

    # =========================================================================
    # 核心: 突触前脉冲到达
    # =========================================================================

    def on_presynaptic_spike(self, t_spike: float, t_lastspike: float,
                             thread: int = 0) -> float:
        """处理一个突触前脉冲, 更新权重与痕迹并向目标分发事件

        Args:
            t_spike: 当前突触前脉冲时间 (ms)
            t_lastspike: 上一个突触前脉冲时间 (ms), 新突触为 0
            thread: 投递该脉冲的线程 (用于解析目标)

        Returns:
            更新后的权重

        Raises:
            SequencingError: t_spike <= t_lastspike, 此时不做任何查询和修改
            IllegalConnectionError: 尚未通过 check_connection 设置目标
        """
        if not t_spike > t_lastspike:
            raise SequencingError(
                f"突触前脉冲时间必须严格递增: t_spike={t_spike}, "
                f"t_lastspike={t_lastspike}"
            )
        target = self.get_target(thread)
        if target is None:
            raise IllegalConnectionError("STDP 连接尚未设置目标 (先调用 check_connection)")

        dendritic_delay = self.get_delay()
        tau_plus = self.rule.params.tau_plus
        facilitate = self.rule.facilitate
        kplus = self._kplus
        w = self._weight

        # 1-2. 上一个突触前脉冲以来的突触后脉冲 → 增强
        post_times = target.query_history(t_lastspike - dendritic_delay,
                                          t_spike - dendritic_delay)
        if len(post_times) <= _VECTORIZE_THRESHOLD:
            _exp = math.exp
            for t_post in post_times:
                minus_dt = t_lastspike - (t_post + dendritic_delay)
                if minus_dt == 0:
                    continue
                w = facilitate(w, kplus * _exp(minus_dt / tau_plus))
        else:
            minus_dt = t_lastspike - (np.asarray(post_times, dtype=np.float64)
                                      + dendritic_delay)
            kernel = kplus * np.exp(minus_dt[minus_dt != 0] / tau_plus)
            # 权重更新依赖前一次结果, 只能顺序做
            for k in kernel.tolist():
                w = facilitate(w, k)

        # 3. 当前突触前脉冲 → 抑制
        w = self.rule.depress(w, target.get_decayed_count(t_spike - dendritic_delay))
        self._weight = w

        # 4. 分发
        target.deliver(SpikeEvent(t_spike, w, self.get_delay_steps(), self.get_rport()))

        # 5. 突触前痕迹
        self._kplus = self.rule.decay_trace(kplus, t_spike - t_lastspike, tau_plus) + 1.0
        return w

    # =========================================================================
    # 状态读写
    # =========================================================================

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def kplus(self) -> float:
        return self._kplus

    @property
    def params(self) -> STDPParams:
        return self.rule.params

    def set_weight(self, w: float) -> None:
        """管理员直接改写权重, 绕过可塑性规则与痕迹"""
        self._weight = float(w)

    def size_of(self) -> int:
        """本突触占用的内存 (字节, 仅供诊断)"""
        return (sys.getsizeof(self) + sys.getsizeof(self.rule)
                + sys.getsizeof(self.rule.params) + sys.getsizeof(self._target))

    def get_status(self) -> Dict[str, float]:
        """返回参数快照 (新字典, 修改它不影响突触)"""
        status = super().get_status()
        status['weight'] = self._weight
        status.update(self.rule.params.to_status())
        status['size_of'] = self.size_of()
        return status

    def set_status(self, d: Mapping) -> None:
        """批量设置参数, 只更新 d 中出现的键

        全部键先校验, 任一非法则抛出 ConfigurationError 且突触保持原状。
        size_of 是只读键, 出现时忽略 (便于 set_status(get_status()) 往返)。

        Raises:
            ConfigurationError: 未知键 / 非数值 / tau_plus <= 0 / Wmax <= 0
        """
        unknown = set(d) - self.SETTABLE_KEYS - set(_READ_ONLY_KEYS)
        if unknown:
            raise ConfigurationError(f"未知的 STDP 参数: {sorted(unknown)}")

        base = self._prepare_base_status(d)
        params = self.rule.params.updated(d)
        weight = _real(d, 'weight') if 'weight' in d else self._weight

        self._commit_base_status(base)
        self.rule.params = params
        self._weight = weight
        logger.debug("STDP 参数更新: %s", {k: d[k] for k in d if k not in _READ_ONLY_KEYS})

    def __copy__(self) -> 'STDPConnection':
        """独立副本: 新的规则对象, 权重与痕迹取当前值"""
        clone = type(self)(
            weight=self._weight,
            params=self.rule.params,
            addressing=copy.copy(self._target),
            delay=self.get_delay(),
            receptor=self._rport,
            resolution=self.resolution,
        )
        clone._kplus = self._kplus
        return clone

    def __repr__(self) -> str:
        return (f"STDPConnection(w={self._weight:.4f}, Kplus={self._kplus:.4f}, "
                f"delay={self.get_delay()}ms, rule={self.rule!r})")
