"""Geometry engines for wind fetch calculations."""
