"""Building blocks of a colourful directory lister: arguments, configuration, colours and layout."""

__version__ = "0.1.0"