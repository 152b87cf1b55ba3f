"""Textual front end for cljr."""
