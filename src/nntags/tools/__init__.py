"""Presentation and console helpers."""
