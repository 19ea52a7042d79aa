"""Editor exceptions."""


class AssetLoadError(Exception):
    """An image could not be decoded or normalized into a drawable asset."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
