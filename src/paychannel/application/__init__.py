"""Application layer: the payment channel and its service messages."""
