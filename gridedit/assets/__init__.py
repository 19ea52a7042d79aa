"""Asset registry, background loading pipeline and folder watcher."""

from gridedit.assets.registry import AssetRegistry
from gridedit.assets.pipeline import (
    AssetPipeline,
    CancelToken,
    IMAGE_EXTENSIONS,
    content_key,
    decode,
    load_asset,
    normalize,
)
from gridedit.assets.watcher import AssetWatcher, ImageFileHandler

__all__ = [
    "AssetRegistry",
    "AssetPipeline",
    "CancelToken",
    "IMAGE_EXTENSIONS",
    "content_key",
    "decode",
    "load_asset",
    "normalize",
    "AssetWatcher",
    "ImageFileHandler",
]
