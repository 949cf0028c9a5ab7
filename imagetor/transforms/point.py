"""
Point - 逐像素变换
"""

import numpy as np

from ..parallel import DEFAULT_NUM_WORKERS, run_partitioned
from ..tensor import validate_tensor

# ITU-R BT.709 亮度权重
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def grayscale(tensor: np.ndarray, num_workers: int = DEFAULT_NUM_WORKERS) -> np.ndarray:
    """
    灰度化（原地）

    gray = 0.2126*R + 0.7152*G + 0.0722*B 写入 R, G, B，alpha 不变。

    Args:
        tensor: float64 (H,W,4)
        num_workers: worker 数量

    Returns:
        传入的张量
    """
    validate_tensor(tensor)
    wr, wg, wb = LUMA_WEIGHTS

    def gray_rows(start: int, end: int) -> None:
        block = tensor[start:end]
        gray = wr * block[..., 0] + wg * block[..., 1] + wb * block[..., 2]
        block[..., :3] = gray[..., np.newaxis]

    run_partitioned(tensor.shape[0], gray_rows, num_workers)
    return tensor
