"""
IO - 图像文件读写

只支持 JPEG 与 PNG，通过文件头魔数识别。
"""

from pathlib import Path

from PIL import Image

from .tensor import UnsupportedFormatError

# 文件头魔数
_MAGIC = {
    "JPEG": b"\xff\xd8",
    "PNG": b"\x89PNG\r\n\x1a\n",
}


def sniff_format(path: str | Path) -> str | None:
    """
    根据文件头识别格式

    Returns:
        "JPEG" | "PNG" | None
    """
    with open(path, "rb") as f:
        header = f.read(8)

    for fmt, magic in _MAGIC.items():
        if header.startswith(magic):
            return fmt
    return None


def open_image(path: str | Path) -> Image.Image:
    """
    打开 JPEG / PNG 图像

    Args:
        path: 图像路径

    Returns:
        已解码的 PIL 图像

    Raises:
        FileNotFoundError: 文件不存在
        UnsupportedFormatError: 不是 JPEG 或 PNG
    """
    fmt = sniff_format(path)
    if fmt is None:
        raise UnsupportedFormatError(f"Unsupported image format: {path}")

    image = Image.open(path)
    image.load()
    return image


def save_image(image: Image.Image, path: str | Path, quality: int = 100) -> None:
    """
    保存图像，格式由扩展名决定（.png 为 PNG，其余为 JPEG）

    JPEG 不支持 alpha，写出前合成到不透明黑色背景上再转换为 RGB。
    """
    path = Path(path)
    if path.suffix.lower() == ".png":
        image.save(path, format="PNG")
        return

    if image.mode != "RGB":
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
        image = Image.alpha_composite(background, rgba).convert("RGB")
    image.save(path, format="JPEG", quality=quality)
