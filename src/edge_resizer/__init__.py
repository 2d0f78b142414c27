"""Edge image resizer: on-the-fly resize and re-encode for CDN delivery."""

__version__ = "0.1.0"
