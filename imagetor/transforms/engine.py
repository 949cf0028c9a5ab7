"""
TransformEngine - 变换模块入口

从配置读取 worker 数量、插值方式和越界策略。
"""

import numpy as np
from omegaconf import DictConfig

from ..parallel import DEFAULT_NUM_WORKERS
from .geometric import rotate, upside_down
from .point import grayscale


class TransformEngine:
    """变换引擎"""

    def __init__(self, cfg: DictConfig):
        """
        初始化变换引擎

        Args:
            cfg: 配置对象，需包含 global.num_workers 和 rotate 段
        """
        global_cfg = getattr(cfg, 'global')
        self.num_workers = global_cfg.get("num_workers", DEFAULT_NUM_WORKERS)
        self.cfg = cfg.rotate
        self.interpolation = self.cfg.get("interpolation", "bilinear")
        self.out_of_bounds = self.cfg.get("out_of_bounds", "zero")

    def grayscale(self, tensor: np.ndarray) -> np.ndarray:
        return grayscale(tensor, self.num_workers)

    def upside_down(self, tensor: np.ndarray) -> np.ndarray:
        return upside_down(tensor)

    def rotate(self, tensor: np.ndarray, angle: float) -> np.ndarray:
        """按配置旋转"""
        return rotate(
            tensor,
            angle,
            num_workers=self.num_workers,
            interpolation=self.interpolation,
            out_of_bounds=self.out_of_bounds
        )
