"""Bundled data files for marklink."""
