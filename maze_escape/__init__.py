"""Maze Escape: procedurally generated mazes, collectible hearts and best times."""
