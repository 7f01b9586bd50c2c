"""Application layer: the resolution pipeline and the ports it consumes."""
