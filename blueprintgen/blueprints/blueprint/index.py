"""Generates a blueprint and definition."""

description = "Generates a blueprint and definition."
