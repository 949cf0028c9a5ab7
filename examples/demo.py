#!/usr/bin/env python
"""
imagetor Demo - 命令行演示脚本

使用方法:
    python examples/demo.py [input_image] [output_image] [--overlay logo.png]

示例:
    python examples/demo.py canteen.jpg output.jpg --overlay logo.png --rotate 5
"""

import sys
from pathlib import Path

# 添加项目根目录到路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import time

import numpy as np
from PIL import Image

from imagetor.io import open_image, save_image
from imagetor.pipeline import load_pipeline


def create_sample_image(width: int = 640, height: int = 480) -> Image.Image:
    """
    创建示例目标图像（水平渐变 + 网格）

    Returns:
        RGB 图像
    """
    img = np.zeros((height, width, 3), dtype=np.uint8)
    ramp = np.linspace(0, 255, width, dtype=np.float64)
    img[:, :, 0] = ramp.astype(np.uint8)
    img[:, :, 1] = 96
    img[:, :, 2] = (255 - ramp).astype(np.uint8)

    # 网格线
    img[::40, :, :] = 255
    img[:, ::40, :] = 255

    return Image.fromarray(img)


def create_sample_logo(size: int = 160) -> Image.Image:
    """
    创建示例 logo（半透明圆形）

    Returns:
        RGBA 图像
    """
    yy, xx = np.mgrid[0:size, 0:size]
    radius = size / 2
    inside = (xx - radius) ** 2 + (yy - radius) ** 2 <= radius ** 2

    logo = np.zeros((size, size, 4), dtype=np.uint8)
    logo[inside] = (255, 220, 0, 200)
    return Image.fromarray(logo)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="imagetor Demo")
    parser.add_argument("input", nargs="?", help="输入图像路径 (JPEG / PNG)")
    parser.add_argument("output", nargs="?", default="output.jpg", help="输出图像路径")
    parser.add_argument("--overlay", help="overlay 图像路径 (JPEG / PNG)")
    parser.add_argument("--width", type=int, help="缩放目标宽度")
    parser.add_argument("--height", type=int, help="缩放目标高度")
    parser.add_argument("--flip", action="store_true", help="上下翻转")
    parser.add_argument("--grayscale", action="store_true", help="灰度化")
    parser.add_argument("--rotate", type=float, default=None, help="旋转角度（度）")
    parser.add_argument("--workers", type=int, help="worker 数量")
    parser.add_argument("--config", help="配置文件路径")
    return parser


def build_params(args: argparse.Namespace) -> dict:
    """只包含命令行显式给出的参数，其余沿用配置文件"""
    params = {}
    if args.flip:
        params["upside_down"] = True
    if args.grayscale:
        params["grayscale"] = True
    if args.rotate is not None:
        params["rotate_angle"] = args.rotate
    if args.width is not None:
        params["resize_width"] = args.width
    if args.height is not None:
        params["resize_height"] = args.height
    return params


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    start_time = time.perf_counter()

    pipe = load_pipeline(args.config)
    if args.workers is not None:
        pipe.cfg["global"].num_workers = args.workers

    params = build_params(args)

    output_path = Path(args.output)
    if not output_path.is_absolute():
        output_path = project_root / "examples" / output_path

    if args.input is None:
        print("[Demo] 未指定输入，使用示例图像")
        overlay = open_image(args.overlay) if args.overlay else create_sample_logo()
        result = pipe.process(create_sample_image(), overlay, params)
        save_image(result, output_path, quality=pipe.cfg.output.quality)
        print(f"[Demo] Image saved: {output_path}")
    else:
        pipe.run(args.input, output_path, overlay_path=args.overlay, params=params)

    elapsed = time.perf_counter() - start_time
    print(f"[Demo] Elapsed time: {elapsed:.3f}s")


if __name__ == "__main__":
    main()
