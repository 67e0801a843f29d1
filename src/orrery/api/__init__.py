"""HTTP adapter exposing the board core."""
