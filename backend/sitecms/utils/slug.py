import uuid

from slugify import slugify


def make_slug(title) -> str:
    """
    Lowercase, ``[a-z0-9-]`` only, no doubled or edge hyphens. Titles made
    entirely of punctuation get a random slug instead of an empty one.
    """
    slug = slugify(title or "")
    return slug or uuid.uuid4().hex[:12]
