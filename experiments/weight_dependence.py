"""
权重依赖实验: μ 如何决定 STDP 的稳定性

2 个实验, 只用 GuetigSTDP 规则本身 (不需要突触后存档):
  实验 1: 单步增强/抑制幅度随权重变化 (四种文献预设)
  实验 2: 随机配对驱动下的稳态权重分布
          加性 (μ=0)  → 双峰, 权重堆积在 0 和 Wmax
          乘性 (μ=1)  → 单峰, 集中在中间
          插值 (0<μ<1) → 介于两者之间

输出一张 PNG (无显示环境也能运行)。
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import math
from typing import Dict

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from tuchu.synapse.plasticity import (
    GuetigSTDP,
    STDPParams,
    MULTIPLICATIVE_STDP_PARAMS,
    ADDITIVE_STDP_PARAMS,
    GUETIG_STDP_PARAMS,
    VAN_ROSSUM_STDP_PARAMS,
)

PRESETS: Dict[str, STDPParams] = {
    'multiplicative (μ=1)': MULTIPLICATIVE_STDP_PARAMS,
    'additive (μ=0)': ADDITIVE_STDP_PARAMS,
    f'Guetig (μ={GUETIG_STDP_PARAMS.mu_plus})': GUETIG_STDP_PARAMS,
    'van Rossum (μ+=0, μ-=1)': VAN_ROSSUM_STDP_PARAMS,
}


def print_header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def experiment_1_step_size(ax_up, ax_down, k: float = 1.0) -> None:
    """单步幅度 Δw(w), k 固定"""
    print_header("实验 1: 单步幅度随权重变化")

    for name, params in PRESETS.items():
        rule = GuetigSTDP(params)
        w = np.linspace(0.0, params.w_max, 201)
        up = np.array([rule.facilitate(float(x), k) for x in w]) - w
        down = w - np.array([rule.depress(float(x), k) for x in w])
        ax_up.plot(w, up, label=name)
        ax_down.plot(w, down, label=name)
        print(f"  {name:28s} Δw+(0)={up[0]:.4f}  Δw+(Wmax)={up[-1]:.4f}  "
              f"Δw-(0)={down[0]:.4f}  Δw-(Wmax)={down[-1]:.4f}")

    ax_up.set_title(f'facilitation step (k={k})')
    ax_down.set_title(f'depression step (k={k})')
    for ax in (ax_up, ax_down):
        ax.set_xlabel('w')
        ax.spines['top'].set_visible(False)
        ax.spines['right'].set_visible(False)
    ax_up.legend(fontsize=7)


def experiment_2_equilibrium(ax, n_synapses: int = 200, n_pairings: int = 2000,
                             alpha: float = 1.05, seed: int = 42) -> Dict[str, np.ndarray]:
    """随机配对: 每次配对 Δt ~ U(-50, 50) ms, Δt>0 增强, Δt<0 抑制"""
    print_header("实验 2: 稳态权重分布")

    rng = np.random.default_rng(seed)
    finals = {}
    for name, preset in PRESETS.items():
        params = STDPParams(tau_plus=preset.tau_plus, lambda_=0.005, alpha=alpha,
                            mu_plus=preset.mu_plus, mu_minus=preset.mu_minus,
                            w_max=preset.w_max)
        rule = GuetigSTDP(params)
        weights = rng.uniform(0.3, 0.7, n_synapses) * params.w_max
        dts = rng.uniform(-50.0, 50.0, (n_pairings, n_synapses))

        for i in range(n_synapses):
            w = float(weights[i])
            for dt in dts[:, i]:
                k = math.exp(-abs(dt) / params.tau_plus)
                w = rule.facilitate(w, k) if dt > 0 else rule.depress(w, k)
            weights[i] = w

        finals[name] = weights
        print(f"  {name:28s} mean={weights.mean():7.3f}  std={weights.std():7.3f}  "
              f"边界附近比例={np.mean((weights < 5) | (weights > 95)):.2f}")
        ax.hist(weights, bins=40, range=(0.0, params.w_max), alpha=0.5, label=name)

    ax.set_title(f'equilibrium weights (α={alpha})')
    ax.set_xlabel('w')
    ax.legend(fontsize=7)
    return finals


def run_all_experiments(save_path: str = 'weight_dependence.png',
                        n_synapses: int = 200, n_pairings: int = 2000,
                        seed: int = 42) -> Dict[str, np.ndarray]:
    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    experiment_1_step_size(axes[0], axes[1])
    finals = experiment_2_equilibrium(axes[2], n_synapses=n_synapses,
                                      n_pairings=n_pairings, seed=seed)

    fig.suptitle('Guetig STDP weight dependence', fontsize=12, fontweight='bold')
    plt.tight_layout()
    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f'\nSaved: {save_path}')
    return finals


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description='STDP 权重依赖实验')
    parser.add_argument('--out', default='weight_dependence.png', help='输出 PNG 路径')
    parser.add_argument('--n', type=int, default=200, help='突触数')
    parser.add_argument('--seed', type=int, default=42, help='随机种子')
    args = parser.parse_args()

    run_all_experiments(save_path=args.out, n_synapses=args.n, seed=args.seed)
