"""Learn Buddy: mini-game catalog, subitizing rounds, progress and achievements."""
