"""
Bilinear - 双线性插值缩放

目标像素 (x, y) 映射到源坐标：
    srcX = x * oldW / newW,  srcY = y * oldH / newH
取 x0 = floor(srcX), y0 = floor(srcY)，按小数部分 dx, dy 混合四个邻点：
    (1-dx)(1-dy)*P00 + dx(1-dy)*P01 + (1-dx)dy*P10 + dx*dy*P11

目标行按区间划分给各 worker，各自写入不相交的行。
"""

import numpy as np
from omegaconf import DictConfig

from ..parallel import DEFAULT_NUM_WORKERS, run_partitioned
from ..tensor import InvalidDimensionsError, new_tensor, validate_tensor

# clamp: 邻点索引截断到最后一行/列，所有像素都会被写入
# skip: x0 >= oldW-1 或 y0 >= oldH-1 的像素保持为零
BOUNDARY_POLICIES = ("clamp", "skip")


def _source_coords(
    start: int,
    end: int,
    old_length: int,
    new_length: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    计算目标索引对应的源坐标

    Returns:
        (i0, i1, frac)：下邻点索引、上邻点索引（已截断）、小数部分
    """
    src = np.arange(start, end, dtype=np.float64) * old_length / new_length
    i0 = np.floor(src).astype(np.intp)
    frac = src - i0
    i1 = np.minimum(i0 + 1, old_length - 1)
    return i0, i1, frac


def resize(
    tensor: np.ndarray,
    width: int,
    height: int,
    num_workers: int = DEFAULT_NUM_WORKERS,
    boundary: str = "clamp"
) -> np.ndarray:
    """
    双线性缩放张量

    Args:
        tensor: float64 (H,W,4)
        width: 目标宽度
        height: 目标高度
        num_workers: worker 数量
        boundary: 边界策略，"clamp" | "skip"

    Returns:
        新的 float64 (height,width,4) 张量，输入不被修改

    Raises:
        InvalidDimensionsError: 输入张量为空或目标尺寸 < 1
    """
    validate_tensor(tensor)
    if width < 1 or height < 1:
        raise InvalidDimensionsError(f"目标尺寸必须为正: {width}x{height}")
    if boundary not in BOUNDARY_POLICIES:
        raise ValueError(f"Unknown boundary policy: {boundary}. Available: {list(BOUNDARY_POLICIES)}")

    old_height, old_width = tensor.shape[:2]
    result = new_tensor(width, height)

    x0, x1, dx = _source_coords(0, width, old_width, width)
    valid_x = x0 < old_width - 1
    wx = dx[np.newaxis, :, np.newaxis]

    def resize_rows(start: int, end: int) -> None:
        y0, y1, dy = _source_coords(start, end, old_height, height)
        wy = dy[:, np.newaxis, np.newaxis]

        p00 = tensor[y0[:, np.newaxis], x0[np.newaxis, :]]
        p01 = tensor[y0[:, np.newaxis], x1[np.newaxis, :]]
        p10 = tensor[y1[:, np.newaxis], x0[np.newaxis, :]]
        p11 = tensor[y1[:, np.newaxis], x1[np.newaxis, :]]

        block = (
            (1 - wx) * (1 - wy) * p00
            + wx * (1 - wy) * p01
            + (1 - wx) * wy * p10
            + wx * wy * p11
        )

        if boundary == "skip":
            valid = (y0 < old_height - 1)[:, np.newaxis] & valid_x[np.newaxis, :]
            block[~valid] = 0.0

        result[start:end] = block

    run_partitioned(height, resize_rows, num_workers)
    return result


class Resampler:
    """缩放器"""

    def __init__(self, cfg: DictConfig):
        """
        初始化缩放器

        Args:
            cfg: 配置对象，需包含 global.num_workers 和 resize.boundary
        """
        global_cfg = getattr(cfg, 'global')
        self.num_workers = global_cfg.get("num_workers", DEFAULT_NUM_WORKERS)
        self.boundary = cfg.resize.get("boundary", "clamp")

    def resize(self, tensor: np.ndarray, width: int, height: int) -> np.ndarray:
        """按配置缩放张量"""
        return resize(tensor, width, height, self.num_workers, self.boundary)
