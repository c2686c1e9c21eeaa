from pathlib import Path
from PIL import Image, ImageDraw, ImageFont

ICON_SIZES = [(256, 256), (128, 128), (64, 64), (48, 48), (32, 32), (16, 16)]


def build_icon(size: int = 256) -> Image.Image:
    img = Image.new("RGBA", (size, size), (14, 18, 26, 255))
    d = ImageDraw.Draw(img)
    s = size / 256

    d.rounded_rectangle((10 * s, 10 * s, 246 * s, 246 * s), radius=36 * s,
                        outline=(0, 220, 170, 255), width=max(1, round(8 * s)))

    # 4 symbols -> 3 bytes: four narrow cells over three wide ones
    y0, y1 = 150 * s, 178 * s
    for i in range(4):
        x = (40 + i * 46) * s
        d.rectangle((x, y0, x + 38 * s, y1), fill=(0, 220, 170, 255))
    y0, y1 = 190 * s, 218 * s
    for i in range(3):
        x = (40 + i * 62) * s
        d.rectangle((x, y0, x + 54 * s, y1), fill=(255, 255, 255, 255))

    text = "B64"
    try:
        font = ImageFont.truetype("arialbd.ttf", round(64 * s))
    except Exception:
        font = ImageFont.load_default()

    bbox = d.textbbox((0, 0), text, font=font)
    tw = bbox[2] - bbox[0]
    d.text(((size - tw) / 2, 40 * s), text, fill=(255, 255, 255, 255), font=font)
    return img


def make_icon(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    build_icon().save(target, format="ICO", sizes=ICON_SIZES)


if __name__ == "__main__":
    repo_root = Path(__file__).resolve().parents[1]
    make_icon(repo_root / "assets" / "b64preview.ico")
    print("Created assets/b64preview.ico")
