"""Filesystem adapters and the directory listing cache."""

from dirpoll.filesystem.listing_cache import DirectoryListingCache, ListingRecord
from dirpoll.filesystem.local import LocalFileSystem

__all__ = ["DirectoryListingCache", "ListingRecord", "LocalFileSystem"]
