"""
Asset ingestion pipeline.

Image files are decoded and normalized on a small worker pool; the
resulting surfaces are registered on the main thread when the editor
calls poll(). Until then the asset key is simply absent from the
registry, so a half-loaded image is never visible to the scene.

    submit(path) ──worker──> decode ─> normalize ─> key
                                                      │
    poll() <──────────── completed queue <────────────┘
      └─> registry.register(key, surface)
"""

from __future__ import annotations

import hashlib
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pygame

from gridedit.errors import AssetLoadError

if TYPE_CHECKING:
    from gridedit.assets.registry import AssetRegistry

logger = logging.getLogger(__name__)


IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp', '.gif', '.webp', '.tga'}


def decode(path: str | Path) -> pygame.Surface:
    """
    Decode an image file.

    Raises:
        AssetLoadError: If the file is missing or not a decodable image
    """
    path = Path(path)
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError) as e:
        raise AssetLoadError(str(path), str(e)) from e


def normalize(surface: pygame.Surface, size: int = 128, source: str = "<surface>") -> pygame.Surface:
    """
    Copy an image onto an RGBA surface and stretch it to a size x size square.

    Aspect ratio is not preserved.

    Raises:
        AssetLoadError: If the image has zero width or height
    """
    width, height = surface.get_size()
    if width == 0 or height == 0:
        raise AssetLoadError(source, f"zero-sized image ({width}x{height})")

    rgba = pygame.Surface((width, height), pygame.SRCALPHA, 32)
    rgba.blit(surface, (0, 0))
    return pygame.transform.smoothscale(rgba, (size, size))


def content_key(surface: pygame.Surface) -> str:
    """Derive an asset key from the surface's RGBA pixels."""
    return hashlib.sha1(pygame.image.tobytes(surface, "RGBA")).hexdigest()


def load_asset(path: str | Path, size: int = 128) -> tuple[str, pygame.Surface]:
    """Decode, normalize and key one image file."""
    surface = normalize(decode(path), size, source=str(path))
    return content_key(surface), surface


class CancelToken:
    """Shared cancellation flag checked between pipeline stages."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class _Job:
    path: Path
    future: Future
    key: str | None = None
    surface: pygame.Surface | None = None
    error: Exception | None = None


class AssetPipeline:
    """
    Background image loader feeding an AssetRegistry.

    Usage:
        pipeline = AssetPipeline(registry)
        future = pipeline.submit("sprites/tree.png")

        # Once per frame, on the main thread
        pipeline.poll()

        # future.result() is now the asset key, or None on failure
        pipeline.shutdown()
    """

    def __init__(self, registry: AssetRegistry, size: int = 128, max_workers: int = 2):
        if size <= 0:
            raise ValueError(f"Asset size must be positive, got {size}")
        self.registry = registry
        self.size = size

        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="asset")
        self._token = CancelToken()
        self._lock = threading.Lock()
        self._pending: list[tuple[_Job, Future]] = []
        self._closed = False

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, path: str | Path) -> Future:
        """
        Queue an image file for loading. Safe to call from any thread.

        Returns:
            Future resolving to the registered key, or None
        """
        job = _Job(Path(path), Future())
        with self._lock:
            if self._closed:
                job.future.set_result(None)
                return job.future
            work = self._executor.submit(self._load, job)
            self._pending.append((job, work))

        logger.debug(f"Queued asset {job.path}")
        return job.future

    def _load(self, job: _Job) -> None:
        """Worker side: decode and normalize, never touches the registry."""
        if self._token.cancelled:
            return
        try:
            image = decode(job.path)
            if self._token.cancelled:
                return
            job.surface = normalize(image, self.size, source=str(job.path))
            job.key = content_key(job.surface)
        except AssetLoadError as e:
            job.error = e

    def poll(self, block: bool = False) -> list[str]:
        """
        Register finished loads. Call from the main thread.

        Args:
            block: Wait for every outstanding load first

        Returns:
            Keys resolved by this call, in submission order
        """
        with self._lock:
            pending = list(self._pending)

        if block:
            for _, work in pending:
                work.exception()

        done: list[tuple[_Job, Future]] = [item for item in pending if item[1].done()]
        if not done:
            return []

        finished = {id(work) for _, work in done}
        with self._lock:
            self._pending = [item for item in self._pending if id(item[1]) not in finished]

        keys = []
        for job, work in done:
            key = self._finish(job, work)
            if key is not None:
                keys.append(key)
        return keys

    def _finish(self, job: _Job, work: Future) -> str | None:
        if work.cancelled() or self._token.cancelled:
            job.future.set_result(None)
            return None

        error = work.exception() or job.error
        if error is not None:
            logger.warning(f"Failed to load asset {job.path}: {error}")
            job.future.set_result(None)
            return None

        if job.key is None or job.surface is None:
            job.future.set_result(None)
            return None

        try:
            self.registry.register(job.key, job.surface)
        except ValueError as e:
            logger.warning(f"Rejected asset {job.path}: {e}")
            job.future.set_result(None)
            return None

        job.future.set_result(job.key)
        return job.key

    def shutdown(self, wait: bool = True) -> None:
        """Cancel outstanding work and resolve any waiting futures to None."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending)
            self._pending.clear()

        self._token.cancel()
        for _, work in pending:
            work.cancel()
        self._executor.shutdown(wait=wait)

        for job, _ in pending:
            if not job.future.done():
                job.future.set_result(None)
        logger.info(f"Asset pipeline stopped ({len(pending)} loads cancelled)")

    def __enter__(self) -> AssetPipeline:
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()
