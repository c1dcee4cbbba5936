"""Path helpers shared by the cache manager and the resolvers."""

import posixpath

PARENT_SEGMENT = ".."


def is_traversal(path: str) -> bool:
    """Check whether ``path`` contains a parent-directory segment.

    Percent-encoded sequences are not decoded here; callers receive the
    path exactly as it was routed.
    """
    return (
        "/../" in path
        or path.startswith("../")
        or path.endswith("/..")
        or path == PARENT_SEGMENT
    )


def force_format(path: str, format: str) -> str:
    """Rewrite the extension of ``path`` to ``format`` keeping its directory.

    Examples:
        >>> force_format("a b/c.jpg", "png")
        'a b/c.png'
        >>> force_format("img.jpg", "png")
        '/img.png'
    """
    directory, filename = posixpath.split(path)
    stem, extension = posixpath.splitext(filename)

    if extension.lstrip(".") == format:
        return path

    # "./img.jpg" reports "." as its directory
    if directory in ("\\", "."):
        directory = ""

    return f"{directory}/{stem}.{format}"
