from .logger import DEFAULT_FORMAT, configure_library_logging, verbosity_level

__all__ = ["DEFAULT_FORMAT", "configure_library_logging", "verbosity_level"]
