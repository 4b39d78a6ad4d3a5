"""
Guetig STDP (权重依赖指数可调的配对 STDP)

归一化权重 ŵ = w / Wmax 上的更新:

  增强 (每个突触后脉冲一次):
    ŵ ← ŵ + λ · (1 - ŵ)^μ+ · k+        再截断到 ≤ 1
  抑制 (每个突触前脉冲一次):
    ŵ ← ŵ - α · λ · ŵ^μ- · k-          再截断到 ≥ 0

其中 k+ 是突触前痕迹 (Kplus) 在突触后脉冲时刻的值,
k- 是突触后单元提供的衰减脉冲计数 (K-, 其时间常数 tau_minus 属于突触后单元)。

μ 决定权重依赖程度:
  μ = 0   加性规则, 步长与当前权重无关, 边界截断承担全部约束
  μ = 1   乘性规则, 步长随与边界的距离线性缩小
  0<μ<1   两者之间插值

参考:
  [1] Guetig et al. (2003) J Neurosci 23:3697-3714
  [2] Rubin, Lee & Sompolinsky (2001) PRL 86:364-367      (乘性)
  [3] Song, Miller & Abbott (2000) Nat Neurosci 3:919-926 (加性)
  [4] van Rossum, Bi & Turrigiano (2000) J Neurosci 20:8812-8821
"""

from dataclasses import dataclass, fields, replace
import math
import numbers
from typing import Dict, Mapping

from tuchu.errors import ConfigurationError
from tuchu.synapse.plasticity.plasticity_base import PlasticityRule


# status 字典键 → STDPParams 字段名
STATUS_FIELDS = {
    'tau_plus': 'tau_plus',
    'lambda': 'lambda_',
    'alpha': 'alpha',
    'mu_plus': 'mu_plus',
    'mu_minus': 'mu_minus',
    'Wmax': 'w_max',
}


@dataclass(frozen=True)
class STDPParams:
    """Guetig STDP 参数

    frozen=True: 预定义参数集是模块级常量, 不能经由某个突触被改写。
    修改参数用 dataclasses.replace / STDPParams.updated 生成新对象。

    Attributes:
        tau_plus: 突触前痕迹与增强核的时间常数 (ms), 必须 > 0
        lambda_:  增强步长
        alpha:    抑制步长相对增强步长的比例 (不对称参数)
        mu_plus:  增强的权重依赖指数
        mu_minus: 抑制的权重依赖指数
        w_max:    权重上界, 必须 > 0
    """
    tau_plus: float = 20.0
    lambda_: float = 0.01
    alpha: float = 1.0
    mu_plus: float = 1.0
    mu_minus: float = 1.0
    w_max: float = 100.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(
                    f"STDP 参数 {f.name} 必须是实数, 得到 {value!r}"
                )
            object.__setattr__(self, f.name, float(value))
        if self.tau_plus <= 0.0:
            raise ConfigurationError(f"tau_plus 必须 > 0, 得到 {self.tau_plus}")
        if self.w_max <= 0.0:
            raise ConfigurationError(f"Wmax 必须 > 0, 得到 {self.w_max}")

    def updated(self, d: Mapping) -> 'STDPParams':
        """按 status 键 (tau_plus/lambda/alpha/mu_plus/mu_minus/Wmax) 生成新参数

        d 中不属于 STATUS_FIELDS 的键被忽略, 由调用方负责。
        """
        changes = {attr: d[key] for key, attr in STATUS_FIELDS.items() if key in d}
        if not changes:
            return self
        return replace(self, **changes)

    def to_status(self) -> Dict[str, float]:
        return {key: getattr(self, attr) for key, attr in STATUS_FIELDS.items()}


# 预定义参数集: 文献中的几种经典权重依赖
MULTIPLICATIVE_STDP_PARAMS = STDPParams(mu_plus=1.0, mu_minus=1.0)   # [2]
ADDITIVE_STDP_PARAMS = STDPParams(mu_plus=0.0, mu_minus=0.0)         # [3]
GUETIG_STDP_PARAMS = STDPParams(mu_plus=0.4, mu_minus=0.4)           # [1], 插值
VAN_ROSSUM_STDP_PARAMS = STDPParams(mu_plus=0.0, mu_minus=1.0)       # [4]


class GuetigSTDP(PlasticityRule):
    """Guetig 权重依赖 STDP 规则

    每个突触持有自己的规则对象 (参数不在突触间共享可变状态)。

    使用示例:
        rule = GuetigSTDP()
        w = rule.facilitate(50.0, 1.0)   # 50 + 100·0.01·0.5·1 = 50.5
        w = rule.depress(w, 0.5)
    """

    __slots__ = ('params',)

    def __init__(self, params: STDPParams = None):
        self.params = params if params is not None else STDPParams()

    def facilitate(self, w: float, k: float) -> float:
        p = self.params
        # 底数截断到 0: 管理员把权重设到 Wmax 以上时不会得到复数
        headroom = max(1.0 - w / p.w_max, 0.0)
        norm_w = w / p.w_max + p.lambda_ * math.pow(headroom, p.mu_plus) * k
        return norm_w * p.w_max if norm_w < 1.0 else p.w_max

    def depress(self, w: float, k: float) -> float:
        p = self.params
        norm_w = w / p.w_max
        norm_w -= p.alpha * p.lambda_ * math.pow(max(norm_w, 0.0), p.mu_minus) * k
        return norm_w * p.w_max if norm_w > 0.0 else 0.0

    def __repr__(self) -> str:
        p = self.params
        return (f"GuetigSTDP(λ={p.lambda_}, α={p.alpha}, μ+={p.mu_plus}, "
                f"μ-={p.mu_minus}, τ+={p.tau_plus}ms, Wmax={p.w_max})")
