"""Ranking data services."""
