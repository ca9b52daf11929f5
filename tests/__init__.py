"""Test package for the typing trainer.

Core tests drive the alphabet, segment and round engine modules directly.
Headless sims script whole sessions through fake renderers and input
sources, and the pygame smoke tests use SDL's dummy video driver so no real
window is opened.  To run these tests, execute ``pytest`` from the project
root.
"""
