"""TuneTalk - chat about the music you're listening to."""

__version__ = "0.1.0"
