"""Validation and querying of Tome.gg learning repositories, with the ``tome`` command."""

__version__ = "0.4.4"