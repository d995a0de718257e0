"""formguard — form-field validators with a pure outcome model."""

__version__ = "0.1.0"
