from .validators import is_valid_url

__all__ = ["is_valid_url"]
