"""Template helpers that expose router state and URL generation to kida."""
