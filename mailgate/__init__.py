"""mailgate - account registration and email verification service."""

__version__ = "0.1.0"
