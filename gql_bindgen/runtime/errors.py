"""Exceptions raised by generated modules at request time."""

from ..core.errors import BindgenError


class LookAheadDecodeError(BindgenError, ValueError):
    """A look-ahead value does not match the type it is decoded into."""
    pass


class TrailNotWalkedError(BindgenError, RuntimeError):
    """A query trail accessor was used before ``walk()``."""
    pass
