"""
imagetor - 像素张量图像处理核心

模块结构：
- tensor.py: 张量数据模型与错误类型
- parallel/: 区间划分与并行执行
- codec/: 光栅图像 <-> 张量
- resample/: 双线性缩放
- compositing/: overlay 叠加
- transforms/: 灰度、翻转、旋转
- io.py: JPEG / PNG 文件读写
- pipeline.py: 主处理流水线
"""

from .tensor import (
    CHANNELS,
    EmptyInputError,
    ImagetorError,
    InvalidDimensionsError,
    UnsupportedFormatError,
)
from .codec import image_to_tensor, tensor_to_image
from .resample import resize
from .compositing import add_overlay, scale_factor
from .transforms import grayscale, rotate, upside_down

__all__ = [
    "CHANNELS",
    "EmptyInputError",
    "ImagetorError",
    "InvalidDimensionsError",
    "UnsupportedFormatError",
    "image_to_tensor",
    "tensor_to_image",
    "resize",
    "add_overlay",
    "scale_factor",
    "grayscale",
    "rotate",
    "upside_down",
]
