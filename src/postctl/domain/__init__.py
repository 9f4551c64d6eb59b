"""Pure domain logic: post naming, front matter, and fenced code blocks.

Nothing in this package touches the filesystem.
"""
