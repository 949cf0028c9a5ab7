"""
Codec 模块 - 图像与张量互转

职责：
- 解码后的光栅图像 -> float64 (H,W,4) 张量
- 张量 -> 新的 RGBA 光栅图像
"""

from .converter import TensorCodec, image_to_tensor, tensor_to_image

__all__ = ["TensorCodec", "image_to_tensor", "tensor_to_image"]
