"""Levels, formatting, the bounded log file and the Logger."""
