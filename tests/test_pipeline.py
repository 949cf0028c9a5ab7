"""
集成测试 - 测试完整 Pipeline 流程与文件读写
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest
from omegaconf import OmegaConf
from PIL import Image

from imagetor.io import open_image, save_image, sniff_format
from imagetor.pipeline import ImagetorPipeline, load_pipeline
from imagetor.tensor import UnsupportedFormatError


@pytest.fixture
def target_image():
    """创建白色目标图像 (64x48)"""
    return Image.new("RGB", (64, 48), (255, 255, 255))


@pytest.fixture
def logo_image():
    """创建不透明红色 logo (16x16)"""
    return Image.new("RGBA", (16, 16), (255, 0, 0, 255))


@pytest.fixture
def pipeline():
    """创建 Pipeline"""
    return load_pipeline()


class TestPipelineIntegration:
    """Pipeline 集成测试"""

    def test_load_pipeline(self):
        """测试加载 Pipeline"""
        pipe = load_pipeline()
        assert isinstance(pipe, ImagetorPipeline)
        assert pipe.cfg["global"].num_workers == 4

    def test_process_without_overlay(self, pipeline, target_image):
        """测试无 overlay 时原样输出"""
        result = pipeline.process(target_image)

        assert result.size == (64, 48)
        assert result.mode == "RGBA"
        assert np.all(np.asarray(result) == 255)

    def test_process_with_overlay(self, pipeline, target_image, logo_image):
        """测试 logo 居中叠加"""
        result = np.asarray(pipeline.process(target_image, logo_image))

        assert result.shape == (48, 64, 4)
        np.testing.assert_array_equal(result[24, 32], [255, 0, 0, 255])
        np.testing.assert_array_equal(result[0, 0], [255, 255, 255, 255])

    def test_overlay_disabled(self, pipeline, target_image, logo_image):
        """测试禁用叠加"""
        result = np.asarray(
            pipeline.process(target_image, logo_image, {"overlay_enabled": False})
        )
        assert np.all(result == 255)

    def test_resize_params(self, pipeline, target_image):
        """测试缩放参数"""
        result = pipeline.process(target_image, params={"resize_width": 32, "resize_height": 20})
        assert result.size == (32, 20)

    def test_resize_single_dimension(self, pipeline, target_image):
        """测试只给出宽度时高度不变"""
        result = pipeline.process(target_image, params={"resize_width": 10})
        assert result.size == (10, 48)

    def test_grayscale_param(self, pipeline):
        """测试灰度参数"""
        image = Image.new("RGB", (8, 8), (200, 30, 90))
        result = np.asarray(pipeline.process(image, params={"grayscale": True}))

        assert np.all(result[..., 0] == result[..., 1])
        assert np.all(result[..., 1] == result[..., 2])

    def test_upside_down_param(self, pipeline):
        """测试翻转参数"""
        pixels = np.zeros((4, 4, 3), dtype=np.uint8)
        pixels[0] = 255
        result = np.asarray(pipeline.process(Image.fromarray(pixels), params={"upside_down": True}))

        assert np.all(result[3, :, :3] == 255)
        assert np.all(result[0, :, :3] == 0)

    def test_rotate_param(self, pipeline, target_image):
        """测试旋转参数：角点越界被置零"""
        result = np.asarray(pipeline.process(target_image, params={"rotate_angle": 45.0}))

        assert result.shape == (48, 64, 4)
        assert result[0, 0, 3] == 0
        assert result[24, 32, 3] == 255

    def test_custom_config(self, tmp_path, target_image):
        """测试自定义配置文件"""
        cfg = OmegaConf.load(Path(__file__).parent.parent / "config" / "default.yaml")
        cfg["global"].num_workers = 1
        cfg.transforms.grayscale = True
        config_path = tmp_path / "custom.yaml"
        OmegaConf.save(cfg, config_path)

        pipe = ImagetorPipeline(config_path)
        assert pipe.codec.num_workers == 1

        image = Image.new("RGB", (5, 5), (255, 0, 0))
        result = np.asarray(pipe.process(image))
        assert result[0, 0, 0] == result[0, 0, 1]


class TestImageIO:
    """文件读写测试"""

    def test_sniff_png(self, tmp_path, logo_image):
        """测试识别 PNG"""
        path = tmp_path / "logo.png"
        logo_image.save(path)
        assert sniff_format(path) == "PNG"

    def test_sniff_jpeg(self, tmp_path, target_image):
        """测试识别 JPEG"""
        path = tmp_path / "target.jpg"
        target_image.save(path, format="JPEG")
        assert sniff_format(path) == "JPEG"

    def test_unsupported_format(self, tmp_path, target_image):
        """测试不支持的格式"""
        path = tmp_path / "target.gif"
        target_image.save(path, format="GIF")

        assert sniff_format(path) is None
        with pytest.raises(UnsupportedFormatError):
            open_image(path)

    def test_missing_file(self, tmp_path):
        """测试文件不存在"""
        with pytest.raises(FileNotFoundError):
            open_image(tmp_path / "missing.png")

    def test_save_jpeg_drops_alpha(self, tmp_path, logo_image):
        """测试 JPEG 输出去除 alpha"""
        path = tmp_path / "out.jpg"
        save_image(logo_image, path)

        with Image.open(path) as saved:
            assert saved.format == "JPEG"
            assert saved.mode == "RGB"

    def test_save_jpeg_flattens_over_black(self, tmp_path):
        """测试 JPEG 输出将半透明像素合成到黑色背景"""
        image = Image.new("RGBA", (16, 16), (255, 0, 0, 128))
        path = tmp_path / "half.jpg"
        save_image(image, path)

        with Image.open(path) as saved:
            pixels = np.asarray(saved).astype(np.int64)

        assert np.all(np.abs(pixels[..., 0] - 128) <= 4)
        assert np.all(pixels[..., 1] <= 4)
        assert np.all(pixels[..., 2] <= 4)

    def test_run_end_to_end(self, pipeline, tmp_path, target_image, logo_image):
        """测试读取、处理、保存完整流程"""
        target_path = tmp_path / "target.png"
        logo_path = tmp_path / "logo.png"
        output_path = tmp_path / "output.png"
        target_image.save(target_path)
        logo_image.save(logo_path)

        result = pipeline.run(target_path, output_path, overlay_path=logo_path)

        assert output_path.exists()
        saved = np.asarray(open_image(output_path))
        np.testing.assert_array_equal(saved, np.asarray(result))
        np.testing.assert_array_equal(saved[24, 32], [255, 0, 0, 255])
