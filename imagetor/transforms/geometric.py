"""
Geometric - 几何变换

旋转使用逆映射：对每个目标像素，将 (x - cx, y - cy) 旋转回源坐标
    srcX =  rx*cos + ry*sin + cx
    srcY = -rx*sin + ry*cos + cy
源坐标落在 [0,W) x [0,H) 内时采样，否则按越界策略处理。
"""

import math

import numpy as np

from ..parallel import DEFAULT_NUM_WORKERS, run_partitioned
from ..tensor import new_tensor, validate_tensor

# bilinear: 与右/下邻点按小数部分混合（邻点索引截断到边界）
# nearest: 只取 floor 处的采样
INTERPOLATION_MODES = ("bilinear", "nearest")

# zero: 越界目标像素置零
# keep: 越界目标像素保留旋转前的值
OUT_OF_BOUNDS_POLICIES = ("zero", "keep")


def upside_down(tensor: np.ndarray) -> np.ndarray:
    """
    上下翻转（原地）

    交换第 y 行与第 H-1-y 行（y < H/2），奇数高度时中间行不动。
    """
    validate_tensor(tensor)
    height = tensor.shape[0]
    half = height // 2

    top = tensor[:half].copy()
    tensor[:half] = tensor[height - half:][::-1]
    tensor[height - half:] = top[::-1]
    return tensor


def rotate(
    tensor: np.ndarray,
    angle: float,
    num_workers: int = DEFAULT_NUM_WORKERS,
    interpolation: str = "bilinear",
    out_of_bounds: str = "zero"
) -> np.ndarray:
    """
    绕几何中心旋转（原地）

    Args:
        tensor: float64 (H,W,4)
        angle: 旋转角度（度）
        num_workers: worker 数量
        interpolation: "bilinear" | "nearest"
        out_of_bounds: "zero" | "keep"

    Returns:
        传入的张量
    """
    validate_tensor(tensor)
    if interpolation not in INTERPOLATION_MODES:
        raise ValueError(f"Unknown interpolation: {interpolation}. Available: {list(INTERPOLATION_MODES)}")
    if out_of_bounds not in OUT_OF_BOUNDS_POLICIES:
        raise ValueError(f"Unknown out_of_bounds policy: {out_of_bounds}. Available: {list(OUT_OF_BOUNDS_POLICIES)}")

    height, width = tensor.shape[:2]
    center_x, center_y = width / 2.0, height / 2.0

    radians = angle * math.pi / 180
    cos_a, sin_a = math.cos(radians), math.sin(radians)

    # 先写入临时缓冲区，全部完成后再拷回
    if out_of_bounds == "zero":
        scratch = new_tensor(width, height)
    else:
        scratch = tensor.copy()

    rotate_x = (np.arange(width, dtype=np.float64) - center_x)[np.newaxis, :]

    def rotate_rows(start: int, end: int) -> None:
        rotate_y = (np.arange(start, end, dtype=np.float64) - center_y)[:, np.newaxis]

        src_x = rotate_x * cos_a + rotate_y * sin_a + center_x
        src_y = -rotate_x * sin_a + rotate_y * cos_a + center_y

        inside = (src_x >= 0) & (src_x < width) & (src_y >= 0) & (src_y < height)
        sx, sy = src_x[inside], src_y[inside]
        x1 = np.floor(sx).astype(np.intp)
        y1 = np.floor(sy).astype(np.intp)

        if interpolation == "nearest":
            values = tensor[y1, x1]
        else:
            x2 = np.minimum(x1 + 1, width - 1)
            y2 = np.minimum(y1 + 1, height - 1)
            dx = (sx - x1)[:, np.newaxis]
            dy = (sy - y1)[:, np.newaxis]
            values = (
                (1 - dx) * (1 - dy) * tensor[y1, x1]
                + dx * (1 - dy) * tensor[y1, x2]
                + (1 - dx) * dy * tensor[y2, x1]
                + dx * dy * tensor[y2, x2]
            )

        block = scratch[start:end]
        block[inside] = values

    run_partitioned(height, rotate_rows, num_workers)
    tensor[...] = scratch
    return tensor
