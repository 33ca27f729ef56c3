"""Page content navigation synchronized with a scroll spy."""
