"""
Demo 脚本测试 - 命令行参数与配置文件的优先级
"""

import importlib.util
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest
from omegaconf import OmegaConf
from PIL import Image

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(scope="module")
def demo():
    """加载 examples/demo.py 模块"""
    spec = importlib.util.spec_from_file_location("imagetor_demo", PROJECT_ROOT / "examples" / "demo.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def grayscale_config(tmp_path):
    """开启灰度化的配置文件"""
    cfg = OmegaConf.load(PROJECT_ROOT / "config" / "default.yaml")
    cfg.transforms.grayscale = True
    path = tmp_path / "gray.yaml"
    OmegaConf.save(cfg, path)
    return path


class TestDemo:
    """Demo 测试类"""

    def test_params_only_include_given_flags(self, demo):
        """测试未给出的参数不写入 params"""
        args = demo.build_parser().parse_args(["in.png", "out.png"])
        assert demo.build_params(args) == {}

    def test_params_from_flags(self, demo):
        """测试显式给出的参数"""
        args = demo.build_parser().parse_args(
            ["in.png", "--grayscale", "--flip", "--rotate", "0", "--width", "8"]
        )
        assert demo.build_params(args) == {
            "grayscale": True,
            "upside_down": True,
            "rotate_angle": 0.0,
            "resize_width": 8,
        }

    def test_config_file_respected(self, demo, tmp_path, grayscale_config):
        """测试配置文件中的灰度设置不被命令行默认值覆盖"""
        input_path = tmp_path / "in.png"
        output_path = tmp_path / "out.png"
        Image.new("RGB", (4, 4), (200, 30, 90)).save(input_path)

        demo.main([str(input_path), str(output_path), "--config", str(grayscale_config)])

        with Image.open(output_path) as saved:
            pixel = np.asarray(saved)[1, 1]
        assert pixel[0] == pixel[1] == pixel[2]
