"""Image (Glance) v2."""

from core.api.image.images import DeleteImage, FindImage, GetImage, ListImages

__all__ = ["DeleteImage", "FindImage", "GetImage", "ListImages"]
