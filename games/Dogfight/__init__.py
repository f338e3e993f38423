"""Dogfight - arcade biplane combat."""
