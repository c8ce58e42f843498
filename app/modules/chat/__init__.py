from .formatting import clean_numbered_steps

__all__ = ["clean_numbered_steps"]
