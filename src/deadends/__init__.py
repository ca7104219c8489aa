"""Render human-readable reports from parser dead ends."""
