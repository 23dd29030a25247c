"""
Show Exporter - writes captured show frames to an animated GIF or a PNG sequence
"""

from pathlib import Path
from typing import List, Sequence

from PIL import Image


# GIF palettes hold 256 entries; one is left free for the encoder
GIF_COLORS = 255


class ShowExporter:
    """Writes frames produced by ShowRunner"""

    @staticmethod
    def _check(frames: Sequence[Image.Image]):
        if not frames:
            raise ValueError("Nothing to export: the frame list is empty")

    @classmethod
    def to_gif(
        cls,
        frames: Sequence[Image.Image],
        path: str | Path,
        duration: int = 33,
        loop: int = 0
    ) -> Path:
        """
        Write an animated GIF.

        Args:
            frames: Same-sized frames, first to last
            path: Target file; missing parent directories are created
            duration: Display time of each frame in ms
            loop: Repeat count, 0 repeats forever

        Returns:
            The written path
        """
        cls._check(frames)
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        quantized = [
            f.convert('RGB').convert('P', palette=Image.ADAPTIVE, colors=GIF_COLORS)
            for f in frames
        ]
        first, rest = quantized[0], quantized[1:]
        first.save(target, format='GIF', save_all=True, append_images=rest,
                   duration=duration, loop=loop, disposal=1)
        return target

    @classmethod
    def to_frames(
        cls,
        frames: Sequence[Image.Image],
        directory: str | Path,
        prefix: str = "frame"
    ) -> List[Path]:
        """Write one numbered PNG per frame into `directory`"""
        cls._check(frames)
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for index, frame in enumerate(frames):
            target = out_dir / f"{prefix}_{index:04d}.png"
            frame.save(target, format='PNG')
            written.append(target)
        return written
