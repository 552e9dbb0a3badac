"""Deck analysis services."""
