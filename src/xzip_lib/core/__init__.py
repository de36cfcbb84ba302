# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for xzip.

This module collects the foundational classes, utilities, and helpers used
across the xzip codebase: configuration, error types, structured logging,
help formatting for the command-line interface, and interactive prompts.
"""
