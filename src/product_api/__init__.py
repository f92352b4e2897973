"""Product API.

A small HTTP service that creates, reads and updates product records stored
in a relational database.
"""

__version__ = "0.1.0"
