"""Personal blog API: public reading, comments and likes, plus an admin console backend."""

__version__ = "1.0.0"
