"""Cinescope.

A client for browsing a remote movie catalog: compile filter selections
into search requests, page through results and keep a personal watchlist
in sync with what is on screen.
"""

__version__ = "0.1.0"

__author__ = "Cinescope Team"
