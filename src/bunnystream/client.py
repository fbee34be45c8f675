"""Synchronous client for the Bunny Stream API."""

from __future__ import annotations

import base64
import json
import logging
import os
from typing import Any, Dict, Optional

import httpx

from bunnystream.exceptions import (
    BunnyStreamError,
    FileMissingError,
    TransportError,
    raise_for_status,
)

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

DEFAULT_BASE_URL = "https://video.bunnycdn.com/library"
DEFAULT_TIMEOUT = 30.0
MAX_REDIRECTS = 10


class BunnyStream:
    """
    Synchronous client for a single Bunny Stream video library.

    Usage::

        stream = BunnyStream("12345", "your_access_key")

        # Create a video record and upload the file into it
        video = stream.upload_video("My video", "/path/to/video.mp4")

        # Browse the library
        page = stream.list_videos(page=1, per_page=25, search="holiday")

        # Captions
        stream.add_video_captions(video["guid"], "en", "/path/to/en.vtt", label="English")

    Every failure is raised as a subclass of ``BunnyStreamError``.
    """

    def __init__(
        self,
        library_id: str,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not library_id or not str(library_id).strip():
            raise ValueError("Invalid library ID. Find it under Stream > API in the dashboard")
        if not api_key or not api_key.strip():
            raise ValueError("Invalid API key. Find it under Stream > API in the dashboard")

        self._library_id = str(library_id).strip()
        self._api_key = api_key.strip()
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            transport=transport,
            headers={
                "AccessKey": self._api_key,
                "Accept": "application/json",
                "User-Agent": f"bunnystream-python/{__version__}",
            },
        )

    @property
    def library_id(self) -> str:
        return self._library_id

    @property
    def base_url(self) -> str:
        return self._base_url

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    # ─── Videos ──────────────────────────────────────────────────────

    def get_video(self, video_id: str) -> Dict[str, Any]:
        """
        Get a single video record.

        Raises:
            NotFoundError: No video with this ID in the library.
        """
        return self._call(
            "Could not retrieve video. Error: ", "GET", f"/videos/{video_id}"
        )

    def list_videos(
        self,
        page: int = 1,
        per_page: int = 10,
        sort_by: str = "date",
        search: Optional[str] = None,
        collection: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List videos in the library.

        Args:
            page: Page number, starting at 1.
            per_page: Number of videos per page.
            sort_by: Field to sort by (default "date").
            search: Only return videos matching this text.
            collection: Only return videos in this collection ID.

        Returns:
            Raw API response dict (``totalItems``, ``currentPage``,
            ``itemsPerPage``, ``items``).
        """
        params: Dict[str, Any] = {"page": page, "per_page": per_page, "sort_by": sort_by}
        if search:
            params["search"] = search
        if collection:
            params["collection"] = collection

        return self._call(
            "Could not retrieve list of videos. Error: ", "GET", "/videos", params=params
        )

    def update_video(self, video_id: str, title: str, collection_id: str) -> Dict[str, Any]:
        """Update the title and collection of an existing video."""
        body = {"title": title, "collectionId": collection_id}
        return self._call("Error updating video: ", "POST", f"/videos/{video_id}", json=body)

    def delete_video(self, video_id: str) -> Dict[str, Any]:
        """Delete a video and all of its files."""
        return self._call("Could not delete video: ", "DELETE", f"/videos/{video_id}")

    def create_video(self, title: str, collection_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Create an empty video record.

        Args:
            title: Video title.
            collection_id: Collection to place the video in.

        Returns:
            The created video record; its ``guid`` is the ID to upload into.
        """
        body: Dict[str, Any] = {"title": title}
        if collection_id:
            body["collectionId"] = collection_id

        data = self._call("Could not create video. Error: ", "POST", "/videos", json=body)
        logger.info("Created video %s in library %s", data.get("guid"), self._library_id)
        return data

    # ─── Uploads ─────────────────────────────────────────────────────

    def upload_video_with_video_id(self, video_id: str, file_path: str) -> Dict[str, Any]:
        """
        Upload file content into an existing video record.

        The file is streamed as the raw request body.

        Raises:
            FileMissingError: ``file_path`` does not exist. No request is sent.
        """
        if not os.path.isfile(file_path):
            raise FileMissingError(file_path)

        with open(file_path, "rb") as f:
            data = self._call(
                "Upload failed. Error: ",
                "PUT",
                f"/videos/{video_id}",
                content=f,
                content_type="application/octet-stream",
            )
        logger.info("Uploaded %s to video %s", file_path, video_id)
        return data

    def upload_video(
        self,
        title: str,
        file_path: str,
        collection_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a video record, then upload ``file_path`` into it.

        Errors from either step propagate unchanged.

        Returns:
            Response of the upload request.
        """
        video = self.create_video(title, collection_id)
        video_id = video.get("guid")
        if not video_id:
            raise BunnyStreamError("Could not create video. Error: response has no guid")
        return self.upload_video_with_video_id(video_id, file_path)

    # ─── Thumbnails & Fetch ──────────────────────────────────────────

    def set_video_thumbnail(self, video_id: str, thumbnail_url: str) -> Dict[str, Any]:
        """Set the thumbnail of a video from a publicly reachable image URL."""
        body = {"thumbnailUrl": thumbnail_url}
        return self._call(
            "Could not set video thumbnail. Error: ",
            "POST",
            f"/videos/{video_id}/thumbnail",
            json=body,
        )

    def fetch_video(
        self,
        video_id: str,
        source: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Have the provider download the video content from a remote URL.

        Args:
            video_id: Video ID.
            source: URL to fetch the video from.
            headers: HTTP headers the provider sends while fetching.
        """
        body: Dict[str, Any] = {"url": source}
        if headers:
            body["headers"] = headers

        return self._call(
            "Could not fetch video. Error: ", "POST", f"/videos/{video_id}/fetch", json=body
        )

    # ─── Captions ────────────────────────────────────────────────────

    def add_video_captions(
        self,
        video_id: str,
        language: str,
        captions_path: str,
        label: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Add or replace a caption track.

        Args:
            video_id: Video ID.
            language: Unique srclang shortcode (e.g. "en").
            captions_path: Path to a local captions file (VTT/SRT).
            label: Text label shown in the player.

        Raises:
            FileMissingError: ``captions_path`` does not exist. No request is sent.
        """
        if not os.path.isfile(captions_path):
            raise FileMissingError(captions_path)

        with open(captions_path, "rb") as f:
            encoded = base64.b64encode(f.read()).decode("ascii")

        body: Dict[str, Any] = {"captionsFile": encoded, "srclang": language}
        if label:
            body["label"] = label

        return self._call(
            "Could not add captions. Error: ",
            "POST",
            f"/videos/{video_id}/captions/{language}",
            json=body,
        )

    def delete_video_captions(self, video_id: str, language: str) -> Dict[str, Any]:
        """Delete the caption track for ``language``."""
        return self._call(
            "Could not delete captions. Error: ",
            "DELETE",
            f"/videos/{video_id}/captions/{language}",
        )

    # ─── HTTP Layer ──────────────────────────────────────────────────

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{self._library_id}{path}"

    def _call(self, prefix: str, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            return self._request_json(method, path, **kwargs)
        except BunnyStreamError as e:
            raise e.with_context(prefix) from e

    def _request_json(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        body = self._request(method, path, **kwargs)
        if not body.strip():
            return {}
        try:
            return json.loads(body)
        except ValueError as e:
            raise BunnyStreamError("Invalid JSON in response") from e

    def _request(
        self,
        method: str,
        path: str,
        *,
        content_type: str = "application/json",
        **kwargs,
    ) -> bytes:
        url = self._url(path)
        logger.debug("%s %s", method, path)

        try:
            resp = self._client.request(
                method, url, headers={"Content-Type": content_type}, **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"HTTP transport error: {e}") from e

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        if resp.status_code != 200:
            logger.warning("%s %s returned %s", method, path, resp.status_code)
        raise_for_status(resp.status_code)
        return resp.content
