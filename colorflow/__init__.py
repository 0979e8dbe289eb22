"""colorflow -- directional color-growth image synthesis.

Builds a square image that contains every color of a cubic color
lattice exactly once. A handful of random seeds are placed first;
every other color is then grown next to its most similar placed
color, biased toward the heading of the branch it grows from.

The same (scale, spread, num_seeds, seed) tuple always reproduces
the same image.
"""
