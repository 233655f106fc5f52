"""
Exception hierarchy shared by the pipeline, storage and API layers.
"""
from __future__ import annotations


class NewsLensError(Exception):
    """Base class for all newslens errors."""


class FeedError(NewsLensError):
    """A feed could not be fetched or parsed."""

    def __init__(self, source_name: str, message: str):
        super().__init__(f"{source_name}: {message}")
        self.source_name = source_name


class NotFoundError(NewsLensError):
    """A requested article, source or channel does not exist."""


class StorageUnavailableError(NewsLensError):
    """The primary store cannot be reached."""
