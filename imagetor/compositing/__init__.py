"""
Compositing 模块 - overlay 叠加

职责：
- 计算 overlay 适配目标的缩放因子（只缩小，不放大）
- 居中放置并进行 alpha 混合
"""

from .overlay import Compositor, add_overlay, scale_factor

__all__ = ["Compositor", "add_overlay", "scale_factor"]
