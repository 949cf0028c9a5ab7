"""
Tensor - 像素张量数据模型

贯穿所有模块的核心数据结构：float64 (H,W,4) 的 numpy 数组，
通道顺序 R, G, B, A，取值范围 [0,1]（16 位采样值 / 65535）。
"""

import numpy as np


# 每个像素的通道数 (RGBA)
CHANNELS = 4

# 16 位通道最大值
MAX_16BIT = 65535.0


class ImagetorError(Exception):
    """imagetor 错误基类"""


class EmptyInputError(ImagetorError, ValueError):
    """叠加操作的目标或 overlay 为空（零行）"""


class InvalidDimensionsError(ImagetorError, ValueError):
    """张量形状或目标尺寸不合法"""


class UnsupportedFormatError(ImagetorError, ValueError):
    """不支持的图像文件格式（仅支持 JPEG / PNG）"""


def new_tensor(width: int, height: int) -> np.ndarray:
    """
    分配全零张量（透明黑）

    Args:
        width: 列数
        height: 行数

    Returns:
        float64 (height,width,4) 全零数组
    """
    if width < 0 or height < 0:
        raise InvalidDimensionsError(f"尺寸不能为负: {width}x{height}")
    return np.zeros((height, width, CHANNELS), dtype=np.float64)


def tensor_size(tensor: np.ndarray) -> tuple[int, int]:
    """返回 (width, height)"""
    return tensor.shape[1], tensor.shape[0]


def validate_tensor(tensor: np.ndarray, name: str = "tensor") -> None:
    """
    检查张量是否为非空的 (H,W,4) 数组

    Raises:
        InvalidDimensionsError: 维度、通道数不正确，或行/列数为零
    """
    if not isinstance(tensor, np.ndarray):
        raise InvalidDimensionsError(f"{name} 必须是 numpy 数组，当前: {type(tensor).__name__}")
    if tensor.ndim != 3 or tensor.shape[2] != CHANNELS:
        raise InvalidDimensionsError(f"{name} 必须是 (H,W,4) 格式，当前: {tensor.shape}")
    if tensor.shape[0] == 0 or tensor.shape[1] == 0:
        raise InvalidDimensionsError(f"{name} 不能为空，当前: {tensor.shape}")
