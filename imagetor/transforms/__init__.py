"""
Transforms 模块 - 点变换与几何变换

职责：
- 灰度化（亮度加权）
- 上下翻转
- 绕中心旋转（逆映射）

所有变换原地修改并返回传入的张量。
"""

from .point import grayscale
from .geometric import INTERPOLATION_MODES, OUT_OF_BOUNDS_POLICIES, rotate, upside_down
from .engine import TransformEngine

__all__ = [
    "grayscale",
    "upside_down",
    "rotate",
    "INTERPOLATION_MODES",
    "OUT_OF_BOUNDS_POLICIES",
    "TransformEngine"
]
