"""Repository layer for file-system backed data access.

These modules are UI-free; they provide deterministic listing and
classification of position files inside a single folder.
"""

