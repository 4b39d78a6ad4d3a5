"""
Guetig STDP 规则验证测试

Case 1: 增强有界: facilitate(w, k) ∈ [w, Wmax]
Case 2: 抑制有界: depress(w, k) ∈ [0, w]
Case 3: 加性规则 (μ=0): 步长与权重无关
Case 4: 乘性规则 (μ=1): 步长随与边界距离线性缩小
Case 5: k=0 → 权重不变
Case 6: 加性抑制在 w=0 处的下界截断精确为 0
Case 7: α 不对称参数
Case 8: 参数校验与预设
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import math

import numpy as np
import pytest

from tuchu.errors import ConfigurationError
from tuchu.synapse.plasticity import (
    GuetigSTDP,
    STDPParams,
    MULTIPLICATIVE_STDP_PARAMS,
    ADDITIVE_STDP_PARAMS,
    GUETIG_STDP_PARAMS,
    VAN_ROSSUM_STDP_PARAMS,
)

W_MAX = 100.0
TOL = 1e-9 * W_MAX
WEIGHTS = np.linspace(0.0, W_MAX, 41)
KS = [0.0, 0.1, 1.0, 3.0, 50.0]
MUS = [0.0, 0.25, 0.5, 1.0]


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def test_case_1_facilitation_bounded():
    """增强单调不减, 且不超过 Wmax"""
    print_header("Case 1: 增强有界")

    for mu in MUS:
        rule = GuetigSTDP(STDPParams(mu_plus=mu, lambda_=0.05, w_max=W_MAX))
        for w in WEIGHTS:
            for k in KS:
                new_w = rule.facilitate(float(w), k)
                assert w - TOL <= new_w <= W_MAX, \
                    f"μ+={mu}, w={w}, k={k}: facilitate={new_w} 越界"

    # 大 k 饱和到 Wmax
    rule = GuetigSTDP(ADDITIVE_STDP_PARAMS)
    assert rule.facilitate(90.0, 1e6) == W_MAX
    print(f"  {len(MUS) * len(WEIGHTS) * len(KS)} 组 (μ+, w, k) 均在 [w, Wmax] 内")


def test_case_2_depression_bounded():
    """抑制单调不增, 且不低于 0"""
    print_header("Case 2: 抑制有界")

    for mu in MUS:
        rule = GuetigSTDP(STDPParams(mu_minus=mu, lambda_=0.05, w_max=W_MAX))
        for w in WEIGHTS:
            for k in KS:
                new_w = rule.depress(float(w), k)
                assert 0.0 <= new_w <= w + TOL, \
                    f"μ-={mu}, w={w}, k={k}: depress={new_w} 越界"

    rule = GuetigSTDP(ADDITIVE_STDP_PARAMS)
    assert rule.depress(10.0, 1e6) == 0.0
    print(f"  {len(MUS) * len(WEIGHTS) * len(KS)} 组 (μ-, w, k) 均在 [0, w] 内")


def test_case_3_additive_rule():
    """μ+ = μ- = 0: 固定步长 λ·k·Wmax 和 α·λ·k·Wmax"""
    print_header("Case 3: 加性规则 (μ=0)")

    lam, alpha, k = 0.01, 1.5, 2.0
    rule = GuetigSTDP(STDPParams(lambda_=lam, alpha=alpha,
                                 mu_plus=0.0, mu_minus=0.0, w_max=W_MAX))
    up = lam * k * W_MAX
    down = alpha * lam * k * W_MAX

    for w in [20.0, 40.0, 60.0, 80.0]:
        dw_up = rule.facilitate(w, k) - w
        dw_down = w - rule.depress(w, k)
        print(f"  w={w:5.1f}: +{dw_up:.6f}  -{dw_down:.6f}")
        assert dw_up == pytest.approx(up, rel=1e-9)
        assert dw_down == pytest.approx(down, rel=1e-9)


def test_case_4_multiplicative_rule():
    """μ+ = μ- = 1: 增强 ∝ (Wmax - w), 抑制 ∝ w"""
    print_header("Case 4: 乘性规则 (μ=1)")

    lam, alpha, k = 0.01, 1.0, 1.0
    rule = GuetigSTDP(STDPParams(lambda_=lam, alpha=alpha,
                                 mu_plus=1.0, mu_minus=1.0, w_max=W_MAX))

    for w in [10.0, 50.0, 90.0]:
        dw_up = rule.facilitate(w, k) - w
        dw_down = w - rule.depress(w, k)
        print(f"  w={w:5.1f}: +{dw_up:.6f}  -{dw_down:.6f}")
        assert dw_up == pytest.approx(lam * k * (W_MAX - w), rel=1e-9)
        assert dw_down == pytest.approx(alpha * lam * k * w, rel=1e-9)

    # 边界处步长为 0: 乘性规则自限
    assert rule.facilitate(W_MAX, 5.0) == W_MAX
    assert rule.depress(0.0, 5.0) == 0.0


def test_case_5_zero_k_is_noop():
    """k = 0 时两条规则都不改变权重"""
    print_header("Case 5: k=0 无变化")

    for params in (MULTIPLICATIVE_STDP_PARAMS, ADDITIVE_STDP_PARAMS,
                   GUETIG_STDP_PARAMS, VAN_ROSSUM_STDP_PARAMS):
        rule = GuetigSTDP(params)
        for w in WEIGHTS:
            assert rule.facilitate(float(w), 0.0) == pytest.approx(w, abs=TOL)
            assert rule.depress(float(w), 0.0) == pytest.approx(w, abs=TOL)

    rule = GuetigSTDP()
    assert rule.facilitate(1.0, 0.0) == 1.0
    assert rule.depress(1.0, 0.0) == 1.0


def test_case_6_additive_depression_floor_is_exact():
    """μ- = 0 时 w=0 处抑制项非零, 靠截断保持在 0"""
    print_header("Case 6: 加性抑制下界")

    rule = GuetigSTDP(STDPParams(mu_minus=0.0))
    assert rule.depress(0.0, 1.0) == 0.0
    assert rule.depress(0.5, 10.0) == 0.0  # 0.005 - 0.1 < 0

    # μ- > 0 时 0^μ = 0, 抑制在 0 处自限
    rule = GuetigSTDP(STDPParams(mu_minus=0.5))
    assert rule.depress(0.0, 100.0) == 0.0
    print("  w=0 处抑制结果精确为 0.0")


def test_case_7_alpha_asymmetry():
    """α 只缩放抑制, 不影响增强"""
    print_header("Case 7: α 不对称")

    base = GuetigSTDP(STDPParams(alpha=1.0))
    strong = GuetigSTDP(STDPParams(alpha=2.0))
    w, k = 50.0, 1.0

    assert strong.facilitate(w, k) == base.facilitate(w, k)
    step_base = w - base.depress(w, k)
    step_strong = w - strong.depress(w, k)
    print(f"  α=1 抑制步长 {step_base:.6f}, α=2 抑制步长 {step_strong:.6f}")
    assert step_strong == pytest.approx(2.0 * step_base, rel=1e-9)


def test_case_8_params_validation_and_presets():
    """tau_plus/Wmax 非正或非数值 → ConfigurationError"""
    print_header("Case 8: 参数校验与预设")

    p = STDPParams()
    assert (p.tau_plus, p.lambda_, p.alpha) == (20.0, 0.01, 1.0)
    assert (p.mu_plus, p.mu_minus, p.w_max) == (1.0, 1.0, 100.0)

    for bad in ({'tau_plus': 0.0}, {'tau_plus': -5.0},
                {'w_max': 0.0}, {'w_max': -1.0},
                {'alpha': 'strong'}, {'lambda_': True}):
        with pytest.raises(ConfigurationError):
            STDPParams(**bad)

    # 整数被接受并转成 float
    assert STDPParams(tau_plus=10).tau_plus == 10.0
    assert isinstance(STDPParams(tau_plus=10).tau_plus, float)

    # 预设是 frozen 的
    with pytest.raises(AttributeError):
        ADDITIVE_STDP_PARAMS.mu_plus = 1.0

    assert (ADDITIVE_STDP_PARAMS.mu_plus, ADDITIVE_STDP_PARAMS.mu_minus) == (0.0, 0.0)
    assert (VAN_ROSSUM_STDP_PARAMS.mu_plus, VAN_ROSSUM_STDP_PARAMS.mu_minus) == (0.0, 1.0)
    assert 0.0 < GUETIG_STDP_PARAMS.mu_plus < 1.0

    # status 键 ↔ 字段
    updated = p.updated({'lambda': 0.02, 'Wmax': 10.0, 'weight': 3.0})
    assert updated.lambda_ == 0.02 and updated.w_max == 10.0
    assert p.lambda_ == 0.01, "updated() 不应修改原对象"
    assert updated.to_status() == {
        'tau_plus': 20.0, 'lambda': 0.02, 'alpha': 1.0,
        'mu_plus': 1.0, 'mu_minus': 1.0, 'Wmax': 10.0,
    }
    with pytest.raises(ConfigurationError):
        p.updated({'Wmax': 0.0})


def test_case_9_decay_trace():
    """痕迹衰减 τ 毫秒 → 1/e"""
    print_header("Case 9: 痕迹衰减")

    rule = GuetigSTDP()
    assert rule.decay_trace(1.0, 20.0, 20.0) == pytest.approx(math.exp(-1.0))
    assert rule.decay_trace(3.0, 0.0, 20.0) == 3.0
    decayed = [rule.decay_trace(1.0, dt, 20.0) for dt in np.arange(0.0, 100.0, 10.0)]
    assert all(a > b for a, b in zip(decayed, decayed[1:]))


if __name__ == "__main__":
    print("╔══════════════════════════════════════════════════════════╗")
    print("║  Guetig STDP 规则: 有界性 / 加性 / 乘性 / 参数校验        ║")
    print("╚══════════════════════════════════════════════════════════╝")

    results = {}
    tests = [
        ("Case 1: 增强有界", test_case_1_facilitation_bounded),
        ("Case 2: 抑制有界", test_case_2_depression_bounded),
        ("Case 3: 加性规则", test_case_3_additive_rule),
        ("Case 4: 乘性规则", test_case_4_multiplicative_rule),
        ("Case 5: k=0 无变化", test_case_5_zero_k_is_noop),
        ("Case 6: 加性抑制下界", test_case_6_additive_depression_floor_is_exact),
        ("Case 7: α 不对称", test_case_7_alpha_asymmetry),
        ("Case 8: 参数校验与预设", test_case_8_params_validation_and_presets),
        ("Case 9: 痕迹衰减", test_case_9_decay_trace),
    ]

    for name, test_fn in tests:
        try:
            test_fn()
            results[name] = "PASS"
        except AssertionError as e:
            results[name] = f"FAIL: {e}"

    print_header("总结")
    all_pass = True
    for name, result in results.items():
        icon = "✅" if result == "PASS" else "❌"
        if result != "PASS":
            all_pass = False
        print(f"  {icon} {result}: {name}")

    if not all_pass:
        sys.exit(1)
