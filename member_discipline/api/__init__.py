"""HTTP edge for member discipline."""
