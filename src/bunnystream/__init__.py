"""
Bunny Stream Python SDK
=======================

Python client for the Bunny Stream video library API.

Quick start::

    from bunnystream import BunnyStream

    stream = BunnyStream("your_library_id", "your_access_key")
    video = stream.upload_video("My video", "video.mp4")

    for item in stream.list_videos(per_page=25)["items"]:
        print(item["guid"], item["title"])

Find your library ID and access key under Stream > API in the bunny.net dashboard.
"""

from bunnystream.client import BunnyStream, __version__
from bunnystream.exceptions import (
    BunnyStreamError,
    TransportError,
    UnauthorizedError,
    NotFoundError,
    UnexpectedStatusError,
    FileMissingError,
)

__all__ = [
    "BunnyStream",
    "BunnyStreamError",
    "TransportError",
    "UnauthorizedError",
    "NotFoundError",
    "UnexpectedStatusError",
    "FileMissingError",
]
