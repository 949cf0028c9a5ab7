"""
Resample 模块 - 双线性缩放

职责：
- 将张量缩放到任意新尺寸（放大与缩小同一公式，无抗锯齿预滤波）
- 支持两种边界策略：clamp（默认）与 skip（末行/末列保持透明黑）
"""

from .bilinear import BOUNDARY_POLICIES, Resampler, resize

__all__ = ["BOUNDARY_POLICIES", "Resampler", "resize"]
