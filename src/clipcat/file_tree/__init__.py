"""Filesystem traversal for selections with configurable exclusion rules.

This module provides the tree expander used to turn selected folders into file
lists, the extension-based binary detector, and a tree view of resolved files.
"""
