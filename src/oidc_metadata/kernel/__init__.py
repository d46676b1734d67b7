"""Kernel – error hierarchy and clock abstraction shared by every layer."""
