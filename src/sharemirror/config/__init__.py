from .loader import MirrorConfig, load_config

__all__ = ["MirrorConfig", "load_config"]
