"""
Overlay - 保持长宽比的居中叠加

混合公式（RGB 为预乘值时即标准 "over"）：
    out.rgb = overlay.rgb + (1 - overlay.a) * out.rgb
    out.a   = 1.0
"""

import numpy as np
from omegaconf import DictConfig

from ..parallel import DEFAULT_NUM_WORKERS, run_partitioned
from ..resample import resize
from ..tensor import EmptyInputError, tensor_size, validate_tensor


def scale_factor(target: np.ndarray, overlay: np.ndarray) -> float:
    """
    计算 overlay 的缩放因子

    overlay 的宽或高超过目标时返回 min(tW/oW, tH/oH)，否则返回 1.0。

    Args:
        target: 目标张量
        overlay: overlay 张量

    Returns:
        缩放因子
    """
    base_width, base_height = tensor_size(target)
    overlay_width, overlay_height = tensor_size(overlay)

    if overlay_width > base_width or overlay_height > base_height:
        return min(base_width / overlay_width, base_height / overlay_height)
    return 1.0


def add_overlay(
    target: np.ndarray,
    overlay: np.ndarray,
    num_workers: int = DEFAULT_NUM_WORKERS,
    boundary: str = "clamp"
) -> np.ndarray:
    """
    将 overlay 居中叠加到目标上

    Args:
        target: 目标张量 (H,W,4)
        overlay: overlay 张量 (h,w,4)
        num_workers: worker 数量
        boundary: overlay 缩放时的边界策略

    Returns:
        新的张量，尺寸与目标相同；target 与 overlay 均不被修改

    Raises:
        EmptyInputError: target 或 overlay 为零行
    """
    if len(target) == 0 or len(overlay) == 0:
        raise EmptyInputError("target or overlay is empty")
    validate_tensor(target, "target")
    validate_tensor(overlay, "overlay")

    target_width, target_height = tensor_size(target)
    overlay_width, overlay_height = tensor_size(overlay)

    factor = scale_factor(target, overlay)
    new_width = int(overlay_width * factor)
    new_height = int(overlay_height * factor)

    result = target.copy()
    if new_width == 0 or new_height == 0:
        # 截断后 overlay 尺寸为零，无可叠加区域
        return result

    if factor != 1.0:
        overlay = resize(overlay, new_width, new_height, num_workers, boundary)

    # 居中偏移（整数除法，奇数差值偏向左上）
    offset_x = (target_width - new_width) // 2
    offset_y = (target_height - new_height) // 2

    def blend_rows(start: int, end: int) -> None:
        src = overlay[start:end]
        dst = result[offset_y + start:offset_y + end, offset_x:offset_x + new_width]
        alpha = src[..., 3:4]
        dst[..., :3] = src[..., :3] + (1 - alpha) * dst[..., :3]
        dst[..., 3] = 1.0

    run_partitioned(new_height, blend_rows, num_workers)
    return result


class Compositor:
    """叠加模块"""

    def __init__(self, cfg: DictConfig):
        """
        初始化叠加模块

        Args:
            cfg: 配置对象，需包含 global.num_workers 和 resize.boundary
        """
        global_cfg = getattr(cfg, 'global')
        self.num_workers = global_cfg.get("num_workers", DEFAULT_NUM_WORKERS)
        self.boundary = cfg.resize.get("boundary", "clamp")

    def overlay(self, target: np.ndarray, overlay: np.ndarray) -> np.ndarray:
        """按配置叠加"""
        return add_overlay(target, overlay, self.num_workers, self.boundary)
