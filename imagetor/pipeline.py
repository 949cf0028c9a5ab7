"""
ImagetorPipeline - 主处理流水线

光栅图像 -> 张量 -> {缩放, 叠加, 翻转, 灰度, 旋转} -> 张量 -> 光栅图像
"""

from pathlib import Path
from typing import Any

import numpy as np
from omegaconf import OmegaConf, DictConfig
from PIL import Image

from .io import open_image, save_image


class ImagetorPipeline:
    """图像张量处理 Pipeline"""

    def __init__(self, config_path: str | Path | None = None):
        """
        初始化 Pipeline

        Args:
            config_path: 配置文件路径，默认使用 config/default.yaml
        """
        if config_path is None:
            config_path = Path(__file__).parent.parent / "config" / "default.yaml"
        self.cfg: DictConfig = OmegaConf.load(config_path)

        # 各模块延迟加载
        self._codec = None
        self._resampler = None
        self._compositor = None
        self._transforms = None

    # ==================== 模块懒加载 ====================

    @property
    def codec(self):
        """编解码模块（懒加载）"""
        if self._codec is None:
            from .codec import TensorCodec
            self._codec = TensorCodec(self.cfg)
        return self._codec

    @property
    def resampler(self):
        """缩放模块（懒加载）"""
        if self._resampler is None:
            from .resample import Resampler
            self._resampler = Resampler(self.cfg)
        return self._resampler

    @property
    def compositor(self):
        """叠加模块（懒加载）"""
        if self._compositor is None:
            from .compositing import Compositor
            self._compositor = Compositor(self.cfg)
        return self._compositor

    @property
    def transforms(self):
        """变换模块（懒加载）"""
        if self._transforms is None:
            from .transforms import TransformEngine
            self._transforms = TransformEngine(self.cfg)
        return self._transforms

    # ==================== 主处理流程 ====================

    def process(
        self,
        image: Image.Image,
        overlay: Image.Image | None = None,
        params: dict[str, Any] | None = None
    ) -> Image.Image:
        """
        处理单张图像

        Args:
            image: 目标图像
            overlay: 可选的 overlay 图像（如 logo）
            params: 参数覆盖 (resize_width, resize_height, overlay_enabled,
                upside_down, grayscale, rotate_angle)

        Returns:
            处理后的 RGBA 图像
        """
        params = params or {}

        tensor = self.codec.encode(image)

        # A. 缩放
        tensor = self._apply_resize(tensor, params)

        # B. 叠加
        overlay_enabled = params.get("overlay_enabled", self.cfg.overlay.enabled)
        if overlay is not None and overlay_enabled:
            overlay_tensor = self.codec.encode(overlay)
            tensor = self.compositor.overlay(tensor, overlay_tensor)

        # C. 点变换与几何变换
        if params.get("upside_down", self.cfg.transforms.upside_down):
            tensor = self.transforms.upside_down(tensor)

        if params.get("grayscale", self.cfg.transforms.grayscale):
            tensor = self.transforms.grayscale(tensor)

        angle = params.get("rotate_angle", self.cfg.rotate.angle)
        if angle:
            tensor = self.transforms.rotate(tensor, float(angle))

        return self.codec.decode(tensor)

    def _apply_resize(self, tensor: np.ndarray, params: dict[str, Any]) -> np.ndarray:
        """按参数缩放，宽高只给出一个时另一维保持原值"""
        width = params.get("resize_width", self.cfg.resize.width)
        height = params.get("resize_height", self.cfg.resize.height)
        if width is None and height is None:
            return tensor

        old_height, old_width = tensor.shape[:2]
        return self.resampler.resize(
            tensor,
            int(width) if width is not None else old_width,
            int(height) if height is not None else old_height
        )

    def run(
        self,
        input_path: str | Path,
        output_path: str | Path,
        overlay_path: str | Path | None = None,
        params: dict[str, Any] | None = None
    ) -> Image.Image:
        """
        读取文件、处理并保存

        Args:
            input_path: 目标图像路径
            output_path: 输出路径（.png 为 PNG，其余为 JPEG）
            overlay_path: 可选 overlay 图像路径
            params: 参数覆盖

        Returns:
            处理后的图像
        """
        image = open_image(input_path)
        overlay = open_image(overlay_path) if overlay_path is not None else None

        result = self.process(image, overlay, params)
        save_image(result, output_path, quality=self.cfg.output.quality)
        print(f"[Pipeline] Image saved: {output_path}")
        return result


def load_pipeline(config_path: str | Path | None = None) -> ImagetorPipeline:
    """
    便捷函数：加载 Pipeline

    Args:
        config_path: 配置文件路径

    Returns:
        ImagetorPipeline 实例
    """
    return ImagetorPipeline(config_path)
