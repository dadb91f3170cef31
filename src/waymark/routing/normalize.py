"""Request path normalization.

Mount prefixes and trailing slashes are stripped before matching so
``/app/users/`` and ``/users`` resolve to the same route.
"""


def normalize(uri: str, subdir: str = "") -> str:
    """Convert a raw request URI into a route-matching key.

    A single trailing slash is dropped unless the path is exactly ``/``,
    then every occurrence of *subdir* is removed. An empty result becomes
    ``/``.

    Examples::

        normalize("/app/users/", "/app")  -> "/users"
        normalize("/", "/app")            -> "/"
        normalize("/users", "/app")       -> "/users"
    """
    if uri != "/" and uri.endswith("/"):
        uri = uri[:-1]
    if subdir:
        uri = uri.replace(subdir, "")
    return uri or "/"
