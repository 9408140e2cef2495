"""Slide graph, navigation, breadcrumb layout, and deck lifecycle."""
