"""EduDesk: admin and student console over the institution records API."""

__version__ = "0.1.0"
