"""
ShapeFrame I/O Module

Loading recorded query results and persisting frames.
"""

from shapeframe.io.arrow_frames import read_frames, write_frames
from shapeframe.io.json_results import JsonFileExecutor, load_result_set

__all__ = [
    "JsonFileExecutor",
    "load_result_set",
    "read_frames",
    "write_frames",
]
