"""
Arrow IPC frame storage

Persists frame sequences as one Arrow IPC file per frame, keeping column
labels, types and frame metadata in the Arrow schema.

File naming convention:
    {directory}/frame_{index:03d}.arrow
"""

import logging
from pathlib import Path

import pyarrow as pa
import pyarrow.ipc as ipc

from shapeframe.core.frame import Frame

logger = logging.getLogger(__name__)


def write_frames(directory: str | Path, frames: list[Frame]) -> list[Path]:
    """
    Write frames to Arrow IPC files

    Args:
        directory: Output directory (created if missing)
        frames: Frames in presentation order

    Returns:
        Written file paths, in frame order
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    paths = []
    for index, frame in enumerate(frames):
        table = frame.to_arrow()
        path = directory / f"frame_{index:03d}.arrow"
        with pa.OSFile(str(path), "wb") as sink:
            with ipc.new_file(sink, table.schema) as writer:
                writer.write_table(table)
        paths.append(path)

    logger.debug("Wrote %d frames to %s", len(paths), directory)
    return paths


def read_frames(directory: str | Path) -> list[Frame]:
    """Read frames written by write_frames(), in frame order."""
    frames = []
    for path in sorted(Path(directory).glob("frame_*.arrow")):
        with pa.OSFile(str(path), "rb") as source:
            with ipc.open_file(source) as reader:
                frames.append(Frame.from_arrow(reader.read_all()))
    return frames
