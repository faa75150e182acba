"""BookEasy availability engine: bookable dates and time slots for event types."""

__version__ = "1.0.0"
