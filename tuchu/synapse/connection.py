"""
Layer 1: 连接基类

每个连接记录一条有向 pre→post 边的通用簿记信息:
  - 目标句柄 (通过寻址策略解析, 见 addressing.py)
  - 传导延迟 (以时间步存储, 对外以 ms 表示)
  - 接收端口 rport

可塑性连接 (如 STDPConnection) 继承此类, 只读地使用延迟和目标。
"""

import logging
import math
import numbers
from typing import Dict, Mapping, Optional

from tuchu.errors import ConfigurationError, IllegalConnectionError
from tuchu.spike.history import supports_stdp
from tuchu.synapse.addressing import PointerTarget

logger = logging.getLogger(__name__)


def _real(d: Mapping, key: str) -> float:
    """取出 d[key] 并检查是实数 (bool 不算)"""
    value = d[key]
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(
            f"参数 '{key}' 必须是实数, 得到 {type(value).__name__}: {value!r}"
        )
    return float(value)


class Connection:
    """连接基类

    Attributes:
        resolution: 仿真时间分辨率 (ms/步), 用于 ms ↔ 时间步 换算
    """

    __slots__ = ('_target', '_delay_steps', '_rport', 'resolution')

    # 基类在 status 字典中负责的键
    BASE_STATUS_KEYS = ('delay', 'receptor')

    def __init__(
        self,
        addressing=None,
        delay: float = 1.0,
        receptor: int = 0,
        resolution: float = 1.0,
    ):
        if resolution <= 0.0:
            raise ConfigurationError(f"resolution 必须 > 0, 得到 {resolution}")
        self.resolution = resolution
        self._target = addressing if addressing is not None else PointerTarget()
        self._delay_steps = self._delay_to_steps(delay)
        self._rport = int(receptor)

    # =========================================================================
    # 延迟 / 端口 / 目标
    # =========================================================================

    def _delay_to_steps(self, delay: float) -> int:
        if delay < 0.0:
            raise ConfigurationError(f"delay 必须 >= 0, 得到 {delay}")
        # 半步远离零取整: 0.5 → 1, 2.5 → 3
        return int(math.floor(delay / self.resolution + 0.5))

    def get_delay(self) -> float:
        """树突延迟 (ms)"""
        return self._delay_steps * self.resolution

    def get_delay_steps(self) -> int:
        return self._delay_steps

    def set_delay(self, delay: float) -> None:
        self._delay_steps = self._delay_to_steps(delay)

    def get_rport(self) -> int:
        return self._rport

    def set_rport(self, rport: int) -> None:
        self._rport = int(rport)

    def get_target(self, thread: int = 0):
        return self._target.get_target(thread)

    @property
    def addressing(self):
        """目标寻址策略对象"""
        return self._target

    def check_connection_(self, target, receptor_type: Optional[int] = None,
                          thread: int = 0) -> None:
        """验证目标具备 STDP 能力集, 通过后记录目标与端口

        receptor_type 为 None 时沿用构造时给定的端口。

        Raises:
            IllegalConnectionError: 目标缺少能力集中的任一方法
        """
        if not supports_stdp(target):
            raise IllegalConnectionError(
                f"{type(target).__name__} 不支持 STDP 连接 "
                f"(需要 query_history/get_decayed_count/"
                f"register_stdp_connection/deliver)"
            )
        self._target.set_target(target, thread)
        if receptor_type is not None:
            self._rport = int(receptor_type)

    # =========================================================================
    # 状态读写
    # =========================================================================

    def get_status(self) -> Dict[str, float]:
        return {
            'delay': self.get_delay(),
            'receptor': self._rport,
        }

    def _prepare_base_status(self, d: Mapping) -> tuple:
        """校验基类负责的键, 返回待提交的 (delay_steps, rport), 不修改自身"""
        delay_steps = self._delay_steps
        rport = self._rport
        if 'delay' in d:
            delay_steps = self._delay_to_steps(_real(d, 'delay'))
        if 'receptor' in d:
            value = d['receptor']
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(
                    f"参数 'receptor' 必须是整数, 得到 {value!r}"
                )
            rport = int(value)
        return delay_steps, rport

    def _commit_base_status(self, prepared: tuple) -> None:
        self._delay_steps, self._rport = prepared

    def set_status(self, d: Mapping) -> None:
        """只更新 d 中出现的键; 任一键非法时不做任何修改"""
        self._commit_base_status(self._prepare_base_status(d))
        logger.debug("连接状态更新: %s", dict(d))

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(target={self._target!r}, "
                f"delay={self.get_delay()}ms, rport={self._rport})")

