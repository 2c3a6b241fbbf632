"""Infrastructure layer: adapters implementing application ports."""
