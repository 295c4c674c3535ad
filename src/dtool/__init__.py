"""dtool: a command-line toolbox of data transformations."""

__version__ = "0.3.0"
