"""StarGift core — transfer intent resolution and foundation systems."""

from importlib.metadata import version as _pkg_version

try:
    __version__: str = _pkg_version("stargift")
except Exception:
    __version__ = "dev"
