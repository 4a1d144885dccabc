"""
FFmpeg API: run declarative ffmpeg pipelines over HTTP.
"""

__version__ = "0.1.0"
