"""
Converter - 光栅图像 <-> 张量

采样规则：
- 每个 8 位通道按 v * 257 扩展为 16 位采样值，再除以 65535 归一化
- 16 位灰度图像（如 16 位 PNG）直接按采样值除以 65535，写入 RGB，alpha 为 1
- 默认 RGB 按 alpha 预乘（与 16 位 RGBA 采样接口一致）
- 按列区间划分给各 worker
"""

import numpy as np
from omegaconf import DictConfig
from PIL import Image

from ..parallel import DEFAULT_NUM_WORKERS, run_partitioned
from ..tensor import MAX_16BIT, new_tensor, validate_tensor

# 8 位 -> 16 位扩展因子 (0xFF * 0x101 = 0xFFFF)
_WIDEN_8_TO_16 = 257.0

# 16 位（及 32 位整数）灰度模式，按原始采样值读取
_WIDE_GRAY_MODES = ("I;16", "I;16B", "I;16L", "I")


def image_to_tensor(
    image: Image.Image,
    num_workers: int = DEFAULT_NUM_WORKERS,
    premultiply: bool = True
) -> np.ndarray:
    """
    将光栅图像转换为张量

    Args:
        image: PIL 图像（16 位灰度按原值读取，其余模式转换为 RGBA）
        num_workers: worker 数量
        premultiply: 是否将 RGB 按 alpha 预乘

    Returns:
        float64 (H,W,4) [0,1]
    """
    width, height = image.size
    tensor = new_tensor(width, height)

    if image.mode in _WIDE_GRAY_MODES:
        gray = np.clip(np.asarray(image).astype(np.float64), 0.0, MAX_16BIT)

        def convert_columns(start: int, end: int) -> None:
            tensor[:, start:end, :3] = gray[:, start:end, np.newaxis] / MAX_16BIT
            tensor[:, start:end, 3] = 1.0

        run_partitioned(width, convert_columns, num_workers)
        return tensor

    if image.mode != "RGBA":
        image = image.convert("RGBA")
    pixels = np.asarray(image, dtype=np.uint8)

    def convert_columns(start: int, end: int) -> None:
        samples = pixels[:, start:end].astype(np.float64) * _WIDEN_8_TO_16
        block = samples / MAX_16BIT
        if premultiply:
            block[..., :3] *= block[..., 3:4]
        tensor[:, start:end] = block

    run_partitioned(width, convert_columns, num_workers)
    return tensor


def tensor_to_image(
    tensor: np.ndarray,
    num_workers: int = DEFAULT_NUM_WORKERS,
    premultiplied: bool = True
) -> Image.Image:
    """
    将张量转换为新的 RGBA 图像

    Args:
        tensor: float64 (H,W,4) [0,1]
        num_workers: worker 数量
        premultiplied: 张量中的 RGB 是否为预乘值（写出前还原）

    Returns:
        PIL RGBA 图像
    """
    validate_tensor(tensor)
    height, width = tensor.shape[:2]
    pixels = np.empty((height, width, 4), dtype=np.uint8)

    def convert_columns(start: int, end: int) -> None:
        block = np.clip(tensor[:, start:end], 0.0, 1.0)
        if premultiplied:
            alpha = block[..., 3:4]
            rgb = np.divide(
                block[..., :3], alpha,
                out=np.zeros_like(block[..., :3]),
                where=alpha > 0
            )
            block[..., :3] = np.clip(rgb, 0.0, 1.0)

        samples = np.round(block * MAX_16BIT)
        pixels[:, start:end] = np.round(samples / _WIDEN_8_TO_16).astype(np.uint8)

    run_partitioned(width, convert_columns, num_workers)
    return Image.fromarray(pixels)


class TensorCodec:
    """张量编解码器"""

    def __init__(self, cfg: DictConfig):
        """
        初始化编解码器

        Args:
            cfg: 配置对象，需包含 global.num_workers 和 codec.premultiply_alpha
        """
        global_cfg = getattr(cfg, 'global')
        self.num_workers = global_cfg.get("num_workers", DEFAULT_NUM_WORKERS)
        self.premultiply = cfg.codec.get("premultiply_alpha", True)

    def encode(self, image: Image.Image) -> np.ndarray:
        """图像 -> 张量"""
        return image_to_tensor(image, self.num_workers, self.premultiply)

    def decode(self, tensor: np.ndarray) -> Image.Image:
        """张量 -> 图像"""
        return tensor_to_image(tensor, self.num_workers, self.premultiply)
