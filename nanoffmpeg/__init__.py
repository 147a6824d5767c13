"""Terminal front-end building blocks for choosing and composing ffmpeg jobs."""

__version__ = "0.1.0"