"""IR Explorer: correlate rustc IR dumps with the source that produced them."""

__version__ = "0.1.0"
