"""Components of a small hobby operating system as plain Python objects, with its calculator, picture decoder, game and demo data."""

__version__ = "0.1.0"