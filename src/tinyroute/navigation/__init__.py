"""Navigation — state, history, and the event sources that trigger dispatch."""
