"""iabroker - imagery access broker for Landsat and Sentinel-2 scenes."""

__version__ = "1.0.0"

try:
    from iabroker.config import config
    __all__ = ["config", "__version__"]
except ImportError:
    # Config might not be available during installation
    __all__ = ["__version__"]
