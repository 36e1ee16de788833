"""HTTP surface for the voice toggle."""
