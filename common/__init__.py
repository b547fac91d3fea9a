from .logging import setup_default_logging
