"""Dogfight game core: entities, simulation step and rendering."""
