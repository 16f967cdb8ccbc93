"""Resource tree, error channel and embedded payload decoders."""
