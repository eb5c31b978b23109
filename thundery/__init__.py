"""Current weather for one city, drawn as a small ASCII report in the terminal."""

__version__ = "0.1.0"
