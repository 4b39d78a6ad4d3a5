"""
异常层级

突触核心本身不做 I/O, 也不分配会失败的资源,
所以这里只有三类错误, 都代表调用方的契约被破坏:

TuchuError (基类)
├── ConfigurationError     参数非法 (tau_plus <= 0, Wmax <= 0, 非数值)
├── SequencingError        脉冲时间非严格递增 (上游调度已损坏, 不重试)
└── IllegalConnectionError 目标不具备 STDP 能力集 / 目标索引不存在
"""


class TuchuError(Exception):
    """所有 tuchu 异常的基类"""


class ConfigurationError(TuchuError):
    """参数非法

    在参数设置时立即抛出, 而不是等到第一次脉冲到达时
    才出现除零或退化行为。
    """


class SequencingError(TuchuError):
    """突触前脉冲时间违反严格递增约束 (t_spike <= t_lastspike)

    说明宿主仿真器的投递顺序保证已被破坏, 属于致命错误。
    """


class IllegalConnectionError(TuchuError):
    """连接目标无法接收 STDP 连接"""
